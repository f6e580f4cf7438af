"""DXF format exporter for sheet cut layouts.

Generates 2D DXF files (R2010 format) for CAM software. Every sheet is
drawn as an outline with its placed pieces, sheets side by side along the
X axis. Units are millimeters.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf
from ezdxf import units

from cutplan.infrastructure.bin_packing import PlacedPiece, SheetLayout
from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from cutplan.application.dtos import OptimizeCutsOutput


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEETS": {"color": 8},  # Gray - sheet outlines
    "PIECES": {"color": 7},  # White - piece outlines
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports sheet layouts to DXF for cutting machines.

    Layout coordinates have their origin at the top-left corner of the
    sheet, while DXF's Y axis points up; pieces are flipped accordingly so
    the drawing matches the SVG diagram.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, sheet_spacing: float = 200.0, labels: bool = True) -> None:
        """Initialize the DXF exporter.

        Args:
            sheet_spacing: Gap between consecutive sheets in mm.
            labels: Whether to draw piece ids and dimensions.
        """
        if sheet_spacing < 0:
            raise ValueError("Sheet spacing must be non-negative")
        self.sheet_spacing = sheet_spacing
        self.labels = labels

    def export(self, output: OptimizeCutsOutput, path: Path) -> None:
        """Write all sheet layouts to a single DXF file."""
        doc = self.build_document(output.report.layouts)
        doc.saveas(path)
        logger.info("Exported DXF with %d sheets to %s", output.report.total_sheets, path)

    def export_string(self, output: OptimizeCutsOutput) -> str:
        doc = self.build_document(output.report.layouts)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def build_document(self, layouts: tuple[SheetLayout, ...]) -> Drawing:
        """Create a DXF document with every sheet drawn in modelspace."""
        doc = ezdxf.new("R2010")
        doc.units = units.MM
        for name, props in LAYERS.items():
            doc.layers.add(name, color=cast(int, props["color"]))

        msp = doc.modelspace()
        offset_x = 0.0
        for layout in layouts:
            self._draw_sheet(msp, layout, offset_x)
            offset_x += layout.sheet_config.width + self.sheet_spacing
        return doc

    def _draw_sheet(self, msp: Modelspace, layout: SheetLayout, offset_x: float) -> None:
        sheet = layout.sheet_config
        self._draw_rect(msp, offset_x, 0.0, sheet.width, sheet.height, "SHEETS")

        if self.labels:
            msp.add_text(
                f"Sheet {layout.sheet_index} - {layout.thickness}mm",
                dxfattribs={
                    "layer": "LABELS",
                    "height": 40.0,
                    "insert": (offset_x, sheet.height + 30.0),
                },
            )

        for piece in layout.pieces:
            x = offset_x + piece.x
            y = sheet.height - piece.bottom_edge
            self._draw_rect(msp, x, y, piece.width, piece.height, "PIECES")
            if self.labels:
                self._draw_label(msp, piece, x, y)

    def _draw_rect(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
        msp.add_lwpolyline(points, close=True, dxfattribs={"layer": layer})

    def _draw_label(self, msp: Modelspace, piece: PlacedPiece, x: float, y: float) -> None:
        # 8% of the smaller side, kept between 10mm and 60mm
        text_height = max(10.0, min(60.0, min(piece.width, piece.height) * 0.08))
        msp.add_mtext(
            f"{piece.id}\n{piece.width:g} x {piece.height:g}",
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + piece.width / 2, y + piece.height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )
