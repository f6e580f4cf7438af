"""JSON exporter writing the report in its wire format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cutplan.application.dtos import OptimizeCutsOutput


@ExporterRegistry.register("json")
class JsonReportExporter:
    """Exports the optimization output as a JSON document.

    The document is the wire report plus ``success`` and ``projectName``,
    suitable for storing as optimization history.
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export(self, output: OptimizeCutsOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")

    def export_string(self, output: OptimizeCutsOutput) -> str:
        return json.dumps(output.to_dict(), indent=self.indent, ensure_ascii=False)
