"""Conversion between optimization reports and the JSON wire format.

The wire format uses camelCase keys and is what the visualization and
export front ends consume::

    {
      "totalSheets": 2,
      "wastePercentage": 41.37,
      "layouts": [
        {"sheetIndex": 1, "thickness": "18",
         "pieces": [{"id": "LAT_0", "width": 600, "height": 720,
                     "area": 432000, "x": 0, "y": 0}]}
      ]
    }
"""

from __future__ import annotations

from typing import Any, Mapping

from cutplan.domain import SheetConfig
from cutplan.infrastructure.bin_packing import (
    OptimizationReport,
    PlacedPiece,
    SheetLayout,
)


def _number(value: float) -> int | float:
    """Emit integral floats as ints so 1000.0 serializes as 1000."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def piece_to_dict(piece: PlacedPiece) -> dict[str, Any]:
    return {
        "id": piece.id,
        "width": _number(piece.width),
        "height": _number(piece.height),
        "area": _number(piece.area),
        "x": _number(piece.x),
        "y": _number(piece.y),
    }


def layout_to_dict(layout: SheetLayout) -> dict[str, Any]:
    return {
        "sheetIndex": layout.sheet_index,
        "thickness": layout.thickness,
        "pieces": [piece_to_dict(p) for p in layout.pieces],
    }


def report_to_dict(report: OptimizationReport) -> dict[str, Any]:
    """Convert a report to its wire dictionary."""
    return {
        "totalSheets": report.total_sheets,
        "wastePercentage": _number(report.waste_percentage),
        "layouts": [layout_to_dict(layout) for layout in report.layouts],
    }


def report_from_dict(
    data: Mapping[str, Any],
    sheet_config: SheetConfig | None = None,
) -> OptimizationReport:
    """Rebuild a report from a stored wire dictionary.

    The sheet size is not part of the wire format, so it must be supplied
    when it differs from the default.

    Raises:
        ValueError: If a required key is missing or malformed.
    """
    sheet = sheet_config or SheetConfig()
    try:
        layouts = tuple(
            SheetLayout(
                sheet_index=int(layout["sheetIndex"]),
                thickness=str(layout["thickness"]),
                pieces=tuple(
                    PlacedPiece(
                        id=str(piece["id"]),
                        width=float(piece["width"]),
                        height=float(piece["height"]),
                        x=float(piece["x"]),
                        y=float(piece["y"]),
                    )
                    for piece in layout["pieces"]
                ),
                sheet_config=sheet,
            )
            for layout in data["layouts"]
        )
        waste = float(data.get("wastePercentage", 0))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed report data: {e}") from e

    return OptimizationReport(layouts=layouts, waste_percentage=waste)
