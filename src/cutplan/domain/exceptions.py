"""Exceptions raised by the cut optimizer."""


class CutOptimizationError(Exception):
    """Base class for errors raised while optimizing a cut plan."""

    pass


class PieceTooLargeError(CutOptimizationError):
    """Raised when a piece cannot fit on an empty sheet.

    Attributes:
        piece_id: Identifier of the offending piece instance.
        width: Piece width in mm.
        height: Piece height in mm.
        sheet_width: Sheet width in mm.
        sheet_height: Sheet height in mm.
    """

    def __init__(
        self,
        piece_id: str,
        width: float,
        height: float,
        sheet_width: float,
        sheet_height: float,
    ) -> None:
        self.piece_id = piece_id
        self.width = width
        self.height = height
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        super().__init__(
            f"Piece '{piece_id}' ({width:g}x{height:g}) exceeds sheet size "
            f"({sheet_width:g}x{sheet_height:g})"
        )


class InputLimitError(CutOptimizationError):
    """Raised when the expanded piece pool exceeds the configured limit."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f"Piece list expands to {count} pieces, above the limit of {limit}"
        )


class ProjectParseError(CutOptimizationError):
    """Raised when a project document cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        super().__init__(message)
