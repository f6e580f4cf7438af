"""Cut diagram rendering for optimization reports.

This module provides SVG and ASCII rendering of sheet layouts showing piece
placements, dimensions and waste areas, plus a plain text waste summary.
"""

from __future__ import annotations

from html import escape

from cutplan.infrastructure.bin_packing import (
    OptimizationReport,
    PlacedPiece,
    SheetLayout,
)

# Fill colors for common board thicknesses (mm)
THICKNESS_COLORS: dict[str, str] = {
    "3": "#F5F5DC",  # Beige
    "6": "#E6E6FA",  # Lavender
    "9": "#D8BFD8",  # Thistle
    "12": "#F0E68C",  # Khaki
    "15": "#90EE90",  # Light green
    "18": "#87CEEB",  # Sky blue
    "25": "#DEB887",  # Burlywood
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _rows(layout: SheetLayout) -> list[tuple[float, float, float]]:
    """Group placements into shelf rows.

    Returns:
        List of (row top y, row height, row right edge), top to bottom.
    """
    rows: dict[float, tuple[float, float]] = {}
    for p in layout.pieces:
        height, right = rows.get(p.y, (0.0, 0.0))
        rows[p.y] = (max(height, p.height), max(right, p.right_edge))
    return [(y, height, right) for y, (height, right) in sorted(rows.items())]


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII formats.

    Attributes:
        scale: Pixels per mm for SVG rendering (default 0.2).
        piece_fill: Fill color for thicknesses without a dedicated color.
        piece_stroke: Stroke color for piece outlines.
        waste_fill: Fill color for waste areas.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show piece dimensions.
        show_labels: Whether to show piece ids.
    """

    def __init__(
        self,
        scale: float = 0.2,
        piece_fill: str = "#ADD8E6",  # Light blue
        piece_stroke: str = "#000000",
        waste_fill: str = "#D3D3D3",  # Light gray
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels

    def render_svg(self, layout: SheetLayout, total_sheets: int = 1) -> str:
        """Generate an SVG cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            total_sheets: Total number of sheets (for header display).

        Returns:
            SVG document as a string.
        """
        sheet = layout.sheet_config
        header_height = 30

        svg_width = sheet.width * self.scale
        svg_height = sheet.height * self.scale + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
            self._render_header(layout, total_sheets, svg_width, header_height),
            "",
            "  <!-- Sheet outline -->",
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.height * self.scale}" '
            f'fill="#f5deb3" stroke="{self.piece_stroke}" stroke-width="2"/>',
        ]

        # Waste first so pieces render on top
        waste_svg = self._render_waste_areas(layout, header_height)
        if waste_svg:
            parts.append("")
            parts.append("  <!-- Waste areas -->")
            parts.append(waste_svg)

        parts.append("")
        parts.append("  <!-- Placed pieces -->")
        fill = THICKNESS_COLORS.get(layout.thickness, self.piece_fill)
        for placement in layout.pieces:
            parts.append(self._render_piece(placement, fill, header_height))

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, report: OptimizationReport) -> list[str]:
        """Generate one SVG document per sheet."""
        total_sheets = report.total_sheets
        return [self.render_svg(layout, total_sheets) for layout in report.layouts]

    def render_combined_svg(self, report: OptimizationReport) -> str:
        """Generate a single SVG with all sheets stacked vertically."""
        if not report.layouts:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20

        svg_width = max(layout.sheet_config.width for layout in report.layouts) * self.scale
        svg_height = sum(
            layout.sheet_config.height * self.scale + header_height + sheet_spacing
            for layout in report.layouts
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        total_sheets = report.total_sheets

        for layout in report.layouts:
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Sheet {layout.sheet_index} -->")

            sheet_svg = self.render_svg(layout, total_sheets)
            start_idx = sheet_svg.find(">") + 1
            end_idx = sheet_svg.rfind("</svg>")
            for line in sheet_svg[start_idx:end_idx].strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")
            y_offset += (
                layout.sheet_config.height * self.scale + header_height + sheet_spacing
            )

        parts.append("</svg>")
        return "\n".join(parts)

    def _header_text(self, layout: SheetLayout, total_sheets: int) -> str:
        return (
            f"Sheet {layout.sheet_index} of {total_sheets} - "
            f"{layout.thickness}mm - {layout.waste_percentage:.1f}% waste"
        )

    def _render_header(
        self,
        layout: SheetLayout,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        title = escape(self._header_text(layout, total_sheets))
        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{title}</text>'
        )

    def _render_piece(
        self,
        placement: PlacedPiece,
        fill: str,
        header_height: float,
    ) -> str:
        x = placement.x * self.scale
        y = header_height + placement.y * self.scale
        w = placement.width * self.scale
        h = placement.height * self.scale

        rect = (
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{self.piece_stroke}"/>'
        )

        font_size = min(12, min(w, h) / 6)
        if font_size < 6:
            # Too small for text
            return f"  {rect}"

        text_x = x + w / 2
        text_y = y + h / 2
        svg_parts = ["  <g>", f"    {rect}"]

        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">'
                f"{escape(placement.id)}</text>"
            )

        if self.show_dimensions:
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">'
                f"{placement.width:g} x {placement.height:g}</text>"
            )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def _render_waste_areas(self, layout: SheetLayout, header_height: float) -> str:
        """Render the uncovered strips of a shelf layout.

        Each row leaves a strip to the right of its last piece, and the
        sheet leaves a strip below its last row. Gaps above short pieces
        inside a row are shown by the sheet background.
        """
        if not layout.pieces:
            return ""

        sheet = layout.sheet_config
        parts: list[str] = []

        def rect(x: float, y: float, w: float, h: float) -> str:
            return (
                f'  <rect x="{x * self.scale}" y="{header_height + y * self.scale}" '
                f'width="{w * self.scale}" height="{h * self.scale}" '
                f'fill="{self.waste_fill}" stroke="none"/>'
            )

        bottom = 0.0
        for row_y, row_height, row_right in _rows(layout):
            if sheet.width - row_right > 0:
                parts.append(rect(row_right, row_y, sheet.width - row_right, row_height))
            bottom = max(bottom, row_y + row_height)

        if sheet.height - bottom > 0:
            parts.append(rect(0.0, bottom, sheet.width, sheet.height - bottom))

        return "\n".join(parts)

    def render_ascii(
        self,
        layout: SheetLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate an ASCII cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            width: Terminal width in characters (default 80).
            total_sheets: Total number of sheets (for header display).

        Returns:
            ASCII representation of the layout.
        """
        sheet = layout.sheet_config

        # Reserve 2 chars for borders
        usable_width = width - 2
        scale_x = usable_width / sheet.width

        # 0.5 compensates for character cell aspect ratio
        grid_height = max(int(usable_width * sheet.height / sheet.width * 0.5), 10)
        scale_y = grid_height / sheet.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in layout.pieces:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines: list[str] = [self._header_text(layout, total_sheets)]
        lines.append("+" + "-" * usable_width + "+")
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPiece,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(placement.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        # Label and dimensions inside the box when space permits
        texts = (placement.id, f"{placement.width:g}x{placement.height:g}")
        for offset, text in enumerate(texts, start=1):
            row = y1 + offset
            if row >= y2:
                break
            text = text[: max(0, x2 - x1 - 1)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, report: OptimizationReport, width: int = 80) -> str:
        """Generate ASCII cut diagrams for all sheets plus a summary line."""
        if not report.layouts:
            return "No sheets to display."

        total_sheets = report.total_sheets
        parts: list[str] = []
        for layout in report.layouts:
            parts.append(self.render_ascii(layout, width, total_sheets))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(total_sheets, 'sheet')}, "
            f"{report.waste_percentage:.2f}% total waste"
        )
        for thickness, count in report.sheets_by_thickness.items():
            parts.append(f"  {thickness}mm: {_plural(count, 'sheet')}")

        return "\n".join(parts)

    def render_waste_summary(self, report: OptimizationReport) -> str:
        """Generate a text summary of waste and sheet usage."""
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {report.total_sheets}",
            f"Total Pieces: {report.total_pieces_placed}",
            f"Total Waste: {report.waste_percentage:.2f}%",
        ]

        if not report.layouts:
            return "\n".join(lines)

        lines.append("")
        lines.append("Sheets by Thickness:")
        for thickness, count in report.sheets_by_thickness.items():
            lines.append(f"  {thickness}mm: {_plural(count, 'sheet')}")

        lines.append("")
        lines.append("Per-Sheet Details:")
        for layout in report.layouts:
            lines.append(
                f"  Sheet {layout.sheet_index}: "
                f"{_plural(layout.piece_count, 'piece')}, "
                f"{layout.waste_percentage:.1f}% waste ({layout.thickness}mm)"
            )

        return "\n".join(lines)
