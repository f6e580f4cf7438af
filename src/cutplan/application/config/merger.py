"""Configuration merging utilities for CLI override support.

This module provides functionality to merge CLI arguments with configuration
file values, following the precedence: CLI args > config values > defaults.

Only non-None CLI arguments override configuration values.
"""

from typing import Any

from cutplan.application.config.schema import (
    OptimizerConfiguration,
    OutputConfig,
    PackingConfig,
    SheetSizeConfig,
)


def merge_config_with_cli(
    config: OptimizerConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    oversized_policy: str | None = None,
    output_format: str | None = None,
) -> OptimizerConfiguration:
    """Merge CLI arguments with configuration values.

    CLI arguments override corresponding config values only when the CLI
    argument is not None. This allows users to keep a base configuration
    file and selectively override specific values from the command line.

    Args:
        config: The base OptimizerConfiguration to merge with
        sheet_width: Override for sheet.width (if not None)
        sheet_height: Override for sheet.height (if not None)
        oversized_policy: Override for packing.oversized_policy (if not None)
        output_format: Override for output.format (if not None)

    Returns:
        A new OptimizerConfiguration with merged values

    Raises:
        pydantic.ValidationError: If an override is out of range.

    Example:
        >>> config = load_config(Path("shop.json"))
        >>> merged = merge_config_with_cli(config, sheet_width=2440)
        >>> merged.sheet.width
        2440.0
    """
    sheet_data = config.sheet.model_dump()
    if sheet_width is not None:
        sheet_data["width"] = sheet_width
    if sheet_height is not None:
        sheet_data["height"] = sheet_height

    packing_data = config.packing.model_dump()
    if oversized_policy is not None:
        packing_data["oversized_policy"] = oversized_policy

    output_data = _build_output_data(config, output_format)

    return OptimizerConfiguration(
        schema_version=config.schema_version,
        sheet=SheetSizeConfig.model_validate(sheet_data),
        packing=PackingConfig.model_validate(packing_data),
        output=OutputConfig.model_validate(output_data),
    )


def _build_output_data(
    config: OptimizerConfiguration,
    output_format: str | None,
) -> dict[str, Any]:
    output_data = config.output.model_dump()
    if output_format is not None:
        output_data["format"] = output_format
    return output_data
