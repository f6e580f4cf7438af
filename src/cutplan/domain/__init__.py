"""Domain layer - piece demands, sheets and piece pool construction."""

from .exceptions import (
    CutOptimizationError,
    InputLimitError,
    PieceTooLargeError,
    ProjectParseError,
)
from .piece_pool import (
    PiecePoolBuilder,
    expand_demand,
    normalize_record,
    partition_by_thickness,
)
from .value_objects import (
    DEFAULT_PIECE_ID,
    DEFAULT_SHEET_HEIGHT,
    DEFAULT_SHEET_WIDTH,
    DEFAULT_THICKNESS,
    PieceDemand,
    PieceInstance,
    SheetConfig,
)

__all__ = [
    "CutOptimizationError",
    "DEFAULT_PIECE_ID",
    "DEFAULT_SHEET_HEIGHT",
    "DEFAULT_SHEET_WIDTH",
    "DEFAULT_THICKNESS",
    "InputLimitError",
    "PieceDemand",
    "PieceInstance",
    "PiecePoolBuilder",
    "PieceTooLargeError",
    "ProjectParseError",
    "SheetConfig",
    "expand_demand",
    "normalize_record",
    "partition_by_thickness",
]
