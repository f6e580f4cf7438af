"""Value objects for the cutting-stock domain.

All value objects are frozen dataclasses so they can be shared freely
between packing runs and used as dictionary keys.

Dimensions are millimeters throughout.
"""

from __future__ import annotations

from dataclasses import dataclass

# Standard panel size used by the furniture projects this tool serves.
DEFAULT_SHEET_WIDTH: float = 2750.0
DEFAULT_SHEET_HEIGHT: float = 1850.0

# Thickness assumed when a piece record does not carry one.
DEFAULT_THICKNESS: str = "18"

# Identifier used when a piece record does not carry one.
DEFAULT_PIECE_ID: str = "P"


@dataclass(frozen=True)
class SheetConfig:
    """Dimensions of the stock sheet pieces are cut from.

    Attributes:
        width: Sheet width in mm (default 2750).
        height: Sheet height in mm (default 1850).
    """

    width: float = DEFAULT_SHEET_WIDTH
    height: float = DEFAULT_SHEET_HEIGHT

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Total sheet area in square mm."""
        return self.width * self.height


@dataclass(frozen=True)
class PieceDemand:
    """A normalized request for identical rectangular pieces.

    Attributes:
        id: Identifier from the source record, or a placeholder.
        width: Piece width in mm.
        height: Piece height in mm.
        thickness: Material thickness classifier, e.g. "18".
        quantity: Number of identical pieces required.
    """

    id: str
    width: float
    height: float
    thickness: str = DEFAULT_THICKNESS
    quantity: int = 1

    @property
    def is_valid(self) -> bool:
        """True if the demand describes at least one piece with positive area."""
        return self.width > 0 and self.height > 0 and self.quantity >= 1

    @property
    def area(self) -> float:
        """Area of a single piece in square mm."""
        return self.width * self.height


@dataclass(frozen=True)
class PieceInstance:
    """One physical piece to be cut, expanded from a PieceDemand.

    Attributes:
        id: Unique identifier of the form "<demand id>_<index>".
        width: Piece width in mm.
        height: Piece height in mm.
        thickness: Material thickness classifier.
    """

    id: str
    width: float
    height: float
    thickness: str = DEFAULT_THICKNESS

    @property
    def area(self) -> float:
        """Piece area in square mm."""
        return self.width * self.height

    def fits_on(self, sheet: SheetConfig) -> bool:
        """Check whether the piece fits on an empty sheet without rotation."""
        return self.width <= sheet.width and self.height <= sheet.height
