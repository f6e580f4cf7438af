"""Data Transfer Objects for the optimize-cuts use case."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from cutplan.infrastructure.bin_packing import OptimizationReport
from cutplan.infrastructure.serialization import report_to_dict


@dataclass
class OptimizeCutsInput:
    """Input for an optimization request.

    Exactly one piece source must be given: raw piece records, or a project
    XML document to extract them from.

    Attributes:
        project_name: Name of the project being optimized.
        pieces: Raw piece records with any accepted field aliases.
        xml_data: Project XML document.
    """

    project_name: str
    pieces: Sequence[Mapping[str, Any]] | None = None
    xml_data: str | bytes | None = None

    def __post_init__(self) -> None:
        if not self.project_name or not self.project_name.strip():
            raise ValueError("Project name is required")
        if (self.pieces is None) == (self.xml_data is None):
            raise ValueError("Provide exactly one of pieces or xml_data")


@dataclass
class OptimizeCutsOutput:
    """Result of an optimization request.

    Attributes:
        project_name: Name of the optimized project.
        report: The optimization report.
    """

    project_name: str
    report: OptimizationReport

    def to_dict(self) -> dict[str, Any]:
        """Response body: success flag, project name and the wire report."""
        return {
            "success": True,
            "projectName": self.project_name,
            **report_to_dict(self.report),
        }
