"""Plain text exporter for the waste summary."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cutplan.application.dtos import OptimizeCutsOutput


@ExporterRegistry.register("txt")
class SummaryExporter:
    """Exports the sheet and waste summary as plain text."""

    format_name: ClassVar[str] = "txt"
    file_extension: ClassVar[str] = "txt"

    def __init__(self) -> None:
        self.renderer = CutDiagramRenderer()

    def export(self, output: OptimizeCutsOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")

    def export_string(self, output: OptimizeCutsOutput) -> str:
        header = f"Project: {output.project_name}\n\n"
        return header + self.renderer.render_waste_summary(output.report) + "\n"
