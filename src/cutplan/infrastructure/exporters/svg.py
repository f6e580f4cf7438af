"""SVG exporter for cut diagrams.

Wraps CutDiagramRenderer to write cut layout diagrams as SVG files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cutplan.application.dtos import OptimizeCutsOutput


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for cut layout diagrams.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.2,
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        """Initialize the SVG exporter.

        Args:
            scale: Pixels per mm for SVG rendering (default 0.2).
            show_dimensions: Whether to show piece dimensions.
            show_labels: Whether to show piece ids.
        """
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
        )

    def export(self, output: OptimizeCutsOutput, path: Path) -> None:
        """Write all sheets stacked vertically into one SVG file."""
        path.write_text(self.export_string(output), encoding="utf-8")

    def export_string(self, output: OptimizeCutsOutput) -> str:
        return self.renderer.render_combined_svg(output.report)

    def export_individual_sheets(
        self, output: OptimizeCutsOutput, base_path: Path
    ) -> list[Path]:
        """Write one SVG file per sheet.

        Files are named {stem}_1.svg, {stem}_2.svg, etc. A single sheet is
        written to base_path unchanged.

        Returns:
            Paths of the created files.
        """
        svgs = self.renderer.render_all_svg(output.report)
        created_files: list[Path] = []

        for i, svg_content in enumerate(svgs, start=1):
            if len(svgs) == 1:
                file_path = base_path
            else:
                suffix = base_path.suffix or ".svg"
                file_path = base_path.parent / f"{base_path.stem}_{i}{suffix}"

            file_path.write_text(svg_content, encoding="utf-8")
            created_files.append(file_path)

        return created_files
