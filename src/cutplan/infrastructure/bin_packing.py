"""Bin packing data models and the shelf packing algorithm.

This module provides data structures for representing sheet layouts,
piece placements and optimization reports, plus the first-fit decreasing
height shelf packer that produces them.

Public dataclasses are frozen (immutable) so reports can be shared between
threads and cached safely. The packer keeps its cursor state in local
variables, so a single packer instance may serve concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping, Sequence

from cutplan.domain import (
    DEFAULT_THICKNESS,
    PieceInstance,
    PiecePoolBuilder,
    PieceTooLargeError,
    SheetConfig,
    partition_by_thickness,
)

logger = logging.getLogger(__name__)

OversizedPolicy = Literal["reject", "place"]
OVERSIZED_POLICIES: tuple[str, ...] = ("reject", "place")

# Upper bound on expanded pieces per run unless configured otherwise.
DEFAULT_MAX_INSTANCES: int = 50_000


@dataclass(frozen=True)
class OptimizerConfig:
    """Configuration for a cut optimization run.

    Attributes:
        sheet_size: Stock sheet dimensions.
        default_thickness: Thickness assumed for records without one.
        oversized_policy: What to do with pieces larger than the sheet.
            "reject" raises PieceTooLargeError before packing starts.
            "place" keeps the legacy behaviour and places the piece anyway,
            producing a placement that overflows the sheet.
        max_instances: Maximum number of expanded pieces, or None for no limit.
    """

    sheet_size: SheetConfig = field(default_factory=SheetConfig)
    default_thickness: str = DEFAULT_THICKNESS
    oversized_policy: OversizedPolicy = "reject"
    max_instances: int | None = DEFAULT_MAX_INSTANCES

    def __post_init__(self) -> None:
        if self.oversized_policy not in OVERSIZED_POLICIES:
            raise ValueError(
                f"Oversized policy must be one of {', '.join(OVERSIZED_POLICIES)}"
            )
        if self.max_instances is not None and self.max_instances < 1:
            raise ValueError("Maximum instances must be at least 1")
        if not self.default_thickness:
            raise ValueError("Default thickness must not be empty")


@dataclass(frozen=True)
class PlacedPiece:
    """A piece placed at a specific position on a sheet.

    Coordinates are the top-left corner of the piece, measured in mm from
    the top-left corner of the sheet.

    Attributes:
        id: Piece instance identifier.
        width: Piece width in mm.
        height: Piece height in mm.
        x: Horizontal position from the left edge in mm.
        y: Vertical position from the top edge in mm.
    """

    id: str
    width: float
    height: float
    x: float
    y: float

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def area(self) -> float:
        """Piece area in square mm."""
        return self.width * self.height

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the piece bottom edge."""
        return self.y + self.height

    def overlaps(self, other: PlacedPiece) -> bool:
        """Check whether two placements share any interior area."""
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.bottom_edge
            and other.y < self.bottom_edge
        )


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single sheet.

    Attributes:
        sheet_index: One-based index of this sheet within the whole run.
        thickness: Material thickness shared by every piece on the sheet.
        pieces: Placed pieces in placement order.
        sheet_config: Dimensions of the sheet.
    """

    sheet_index: int
    thickness: str
    pieces: tuple[PlacedPiece, ...]
    sheet_config: SheetConfig = field(default_factory=SheetConfig)

    def __post_init__(self) -> None:
        if self.sheet_index < 1:
            raise ValueError("Sheet index must be at least 1")

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces in square mm."""
        return sum(p.area for p in self.pieces)

    @property
    def waste_area(self) -> float:
        """Sheet area not covered by pieces in square mm."""
        return self.sheet_config.area - self.used_area

    @property
    def waste_percentage(self) -> float:
        """Percentage of this sheet that is waste."""
        return self.waste_area / self.sheet_config.area * 100

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.pieces)

    def is_contained(self) -> bool:
        """True if every piece lies within the sheet bounds."""
        return all(
            p.right_edge <= self.sheet_config.width
            and p.bottom_edge <= self.sheet_config.height
            for p in self.pieces
        )


@dataclass(frozen=True)
class OptimizationReport:
    """Complete result of a cut optimization run.

    Attributes:
        layouts: Sheet layouts in sheet index order.
        waste_percentage: Overall waste across all sheets, two decimals.
    """

    layouts: tuple[SheetLayout, ...] = ()
    waste_percentage: float = 0.0

    @property
    def total_sheets(self) -> int:
        """Total number of sheets across all thicknesses."""
        return len(self.layouts)

    @property
    def total_pieces_placed(self) -> int:
        """Total number of pieces placed across all sheets."""
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def used_area(self) -> float:
        """Total area covered by pieces in square mm."""
        return sum(layout.used_area for layout in self.layouts)

    @property
    def sheet_area(self) -> float:
        """Total area of all sheets in square mm."""
        return sum(layout.sheet_config.area for layout in self.layouts)

    @property
    def sheets_by_thickness(self) -> dict[str, int]:
        """Sheet count per thickness, in order of first appearance."""
        counts: dict[str, int] = {}
        for layout in self.layouts:
            counts[layout.thickness] = counts.get(layout.thickness, 0) + 1
        return counts


@dataclass
class _OpenSheet:
    """Internal cursor state for the sheet currently being filled.

    Attributes:
        index: One-based sheet index.
        row_height: Height of the current row (tallest piece placed on it).
        x: X position for the next piece in the current row.
        y: Top Y position of the current row.
        placements: Pieces placed so far.
    """

    index: int
    row_height: float
    x: float = 0.0
    y: float = 0.0
    placements: list[PlacedPiece] = field(default_factory=list)

    def fits_new_row(self, piece: PieceInstance, sheet: SheetConfig) -> bool:
        return self.y + self.row_height + piece.height <= sheet.height

    def start_row(self, row_height: float) -> None:
        self.y += self.row_height
        self.x = 0.0
        self.row_height = row_height

    def place(self, piece: PieceInstance) -> PlacedPiece:
        placement = PlacedPiece(
            id=piece.id,
            width=piece.width,
            height=piece.height,
            x=self.x,
            y=self.y,
        )
        self.placements.append(placement)
        self.x += piece.width
        self.row_height = max(self.row_height, piece.height)
        return placement


class ShelfPacker:
    """First-fit decreasing height shelf packer.

    Pieces are sorted by height (tallest first) and placed left to right in
    horizontal rows. When a piece does not fit in the remaining row width,
    a new row is started below the current one; when the new row would not
    fit vertically, the sheet is closed and a new one opened.

    The packer never backtracks, never revisits a closed sheet and never
    rotates pieces, so the same input always yields the same layout.

    Attributes:
        config: Optimizer configuration (sheet size, oversized policy).
    """

    def __init__(self, config: OptimizerConfig) -> None:
        self.config = config

    def pack(
        self,
        pieces: Sequence[PieceInstance],
        thickness: str,
        first_sheet_index: int = 1,
    ) -> list[SheetLayout]:
        """Pack one thickness group onto sheets.

        Args:
            pieces: Piece instances sharing the given thickness.
            thickness: Thickness tag recorded on every produced sheet.
            first_sheet_index: Index given to the first sheet opened, so
                numbering can continue across thickness groups.

        Returns:
            Sheet layouts numbered consecutively from first_sheet_index.

        Raises:
            PieceTooLargeError: If a piece exceeds the sheet and the
                oversized policy is "reject".
        """
        if not pieces:
            return []

        sheet = self.config.sheet_size
        # Stable: equal heights keep their input order.
        ordered = sorted(pieces, key=lambda p: p.height, reverse=True)
        self._check_oversized(ordered)

        layouts: list[SheetLayout] = []
        current: _OpenSheet | None = None
        next_index = first_sheet_index

        for piece in ordered:
            if current is None or current.x + piece.width > sheet.width:
                if current is not None and current.fits_new_row(piece, sheet):
                    current.start_row(piece.height)
                else:
                    if current is not None:
                        layouts.append(self._close(current, thickness))
                    current = _OpenSheet(index=next_index, row_height=piece.height)
                    next_index += 1

            current.place(piece)

        if current is not None and current.placements:
            layouts.append(self._close(current, thickness))

        logger.debug(
            "Thickness %s: %d pieces -> %d sheets",
            thickness,
            len(ordered),
            len(layouts),
        )
        return layouts

    def _check_oversized(self, pieces: Sequence[PieceInstance]) -> None:
        sheet = self.config.sheet_size
        for piece in pieces:
            if piece.fits_on(sheet):
                continue
            if self.config.oversized_policy == "reject":
                raise PieceTooLargeError(
                    piece.id, piece.width, piece.height, sheet.width, sheet.height
                )
            logger.warning(
                "Piece '%s' (%sx%s) exceeds sheet %sx%s, placing anyway",
                piece.id,
                piece.width,
                piece.height,
                sheet.width,
                sheet.height,
            )

    def _close(self, current: _OpenSheet, thickness: str) -> SheetLayout:
        layout = SheetLayout(
            sheet_index=current.index,
            thickness=thickness,
            pieces=tuple(current.placements),
            sheet_config=self.config.sheet_size,
        )
        logger.debug(
            "Sheet %d: %d pieces, %.1f%% waste",
            layout.sheet_index,
            layout.piece_count,
            layout.waste_percentage,
        )
        return layout


class LayoutAggregator:
    """Accumulates sheet layouts from every thickness group of one run.

    The aggregator owns the running sheet counter. Callers ask it for
    ``next_sheet_index`` before packing a group and hand the produced
    layouts back with ``add``.
    """

    def __init__(self) -> None:
        self._layouts: list[SheetLayout] = []

    @property
    def next_sheet_index(self) -> int:
        """Index the next opened sheet must carry."""
        return len(self._layouts) + 1

    def add(self, layouts: Iterable[SheetLayout]) -> None:
        """Append a group's layouts, checking numbering continuity.

        Raises:
            ValueError: If a layout's index does not continue the sequence.
        """
        for layout in layouts:
            expected = self.next_sheet_index
            if layout.sheet_index != expected:
                raise ValueError(
                    f"Sheet index {layout.sheet_index} breaks numbering, "
                    f"expected {expected}"
                )
            self._layouts.append(layout)

    def report(self) -> OptimizationReport:
        """Build the report for everything added so far."""
        return OptimizationReport(
            layouts=tuple(self._layouts),
            waste_percentage=calculate_waste_percentage(self._layouts),
        )


def calculate_waste_percentage(layouts: Sequence[SheetLayout]) -> float:
    """Calculate overall waste across sheets, rounded to two decimals.

    Waste is (total sheet area - total used area) / total sheet area.
    Returns 0 when there are no sheets.
    """
    if not layouts:
        return 0.0

    total_area = sum(layout.sheet_config.area for layout in layouts)
    total_waste = sum(layout.waste_area for layout in layouts)
    return round(total_waste / total_area * 100, 2)


class CutOptimizationService:
    """Runs the full optimization pipeline for a list of piece records.

    Records are normalized and expanded, grouped by thickness, and each
    group is packed independently in first-appearance order. Sheet numbers
    continue across groups.

    Attributes:
        config: Optimizer configuration.
        packer: ShelfPacker used for every thickness group.
    """

    def __init__(self, config: OptimizerConfig | None = None) -> None:
        self.config = config or OptimizerConfig()
        self.packer = ShelfPacker(self.config)
        self.pool_builder = PiecePoolBuilder(
            default_thickness=self.config.default_thickness,
            max_instances=self.config.max_instances,
        )

    def optimize(self, records: Iterable[Mapping[str, Any]]) -> OptimizationReport:
        """Optimize raw piece records.

        Raises:
            InputLimitError: If the expanded pool is too large.
            PieceTooLargeError: If a piece exceeds the sheet under the
                "reject" policy.
        """
        return self.optimize_instances(self.pool_builder.build(records))

    def optimize_instances(
        self,
        instances: Sequence[PieceInstance],
    ) -> OptimizationReport:
        """Optimize already expanded piece instances."""
        groups = partition_by_thickness(instances)

        logger.info(
            "Optimizing %d pieces across %d thickness groups",
            len(instances),
            len(groups),
        )

        aggregator = LayoutAggregator()
        for thickness, group in groups.items():
            aggregator.add(
                self.packer.pack(
                    group,
                    thickness,
                    first_sheet_index=aggregator.next_sheet_index,
                )
            )

        report = aggregator.report()
        logger.info(
            "Optimization finished: %d sheets, %.2f%% waste",
            report.total_sheets,
            report.waste_percentage,
        )
        return report
