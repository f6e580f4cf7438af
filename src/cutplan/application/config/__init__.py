"""Configuration schema and loading system for the cut optimizer.

This package provides JSON-based configuration loading and validation.
It includes Pydantic models for schema validation, a configuration loader
with comprehensive error handling, and an adapter to the packing engine.

Public API:
    - OptimizerConfiguration: Root configuration model
    - SheetSizeConfig: Stock sheet dimensions
    - PackingConfig: Packing behaviour
    - OutputConfig: Output preferences
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_optimizer: Convert a configuration to OptimizerConfig
    - merge_config_with_cli: Apply command-line overrides

Example:
    >>> from pathlib import Path
    >>> from cutplan.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("shop.json"))
    ...     print(f"Sheet: {config.sheet.width}x{config.sheet.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cutplan.application.config.adapter import config_to_optimizer
from cutplan.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutplan.application.config.merger import merge_config_with_cli
from cutplan.application.config.schema import (
    SUPPORTED_VERSIONS,
    OptimizerConfiguration,
    OutputConfig,
    OutputFormatConfig,
    OversizedPolicyConfig,
    PackingConfig,
    SheetSizeConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "OptimizerConfiguration",
    "OutputConfig",
    "OutputFormatConfig",
    "OversizedPolicyConfig",
    "PackingConfig",
    "SheetSizeConfig",
    "config_to_optimizer",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
]
