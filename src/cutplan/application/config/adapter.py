"""Adapter to convert OptimizerConfiguration to the packing engine config.

The Pydantic models describe what a user may write in a configuration
file; the packing engine works with the frozen ``OptimizerConfig``
dataclass. This module maps one onto the other.
"""

from cutplan.application.config.schema import OptimizerConfiguration
from cutplan.domain import SheetConfig
from cutplan.infrastructure.bin_packing import OptimizerConfig


def config_to_optimizer(config: OptimizerConfiguration) -> OptimizerConfig:
    """Convert an OptimizerConfiguration to an OptimizerConfig.

    Args:
        config: A validated configuration.

    Returns:
        OptimizerConfig ready to hand to CutOptimizationService.

    Example:
        >>> config = load_config_from_dict({"schema_version": "1.0"})
        >>> config_to_optimizer(config).sheet_size.width
        2750.0
    """
    return OptimizerConfig(
        sheet_size=SheetConfig(
            width=config.sheet.width,
            height=config.sheet.height,
        ),
        default_thickness=config.packing.default_thickness,
        oversized_policy=config.packing.oversized_policy.value,
        max_instances=config.packing.max_instances,
    )
