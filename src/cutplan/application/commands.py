"""Application commands (use cases) for cut optimization."""

from __future__ import annotations

import logging

from cutplan.infrastructure.bin_packing import CutOptimizationService
from cutplan.infrastructure.xml_parser import ProjectXmlParser

from .dtos import OptimizeCutsInput, OptimizeCutsOutput

logger = logging.getLogger(__name__)


class OptimizeCutsCommand:
    """Command to optimize the cut plan of one project.

    Extracts piece records from the request (parsing project XML when
    needed), runs the optimization service and wraps the report.
    """

    def __init__(
        self,
        service: CutOptimizationService | None = None,
        parser: ProjectXmlParser | None = None,
    ) -> None:
        self.service = service or CutOptimizationService()
        self.parser = parser or ProjectXmlParser()

    def execute(self, request: OptimizeCutsInput) -> OptimizeCutsOutput:
        """Execute the optimization.

        Args:
            request: Project name plus piece records or project XML.

        Returns:
            OptimizeCutsOutput with the optimization report.

        Raises:
            ProjectParseError: If the project XML is malformed.
            InputLimitError: If the piece list expands beyond the limit.
            PieceTooLargeError: If a piece cannot fit on a sheet.
        """
        if request.xml_data is not None:
            records = self.parser.parse(request.xml_data)
        else:
            records = list(request.pieces or [])

        logger.info(
            "Optimizing project '%s' with %d piece records",
            request.project_name,
            len(records),
        )
        report = self.service.optimize(records)
        return OptimizeCutsOutput(project_name=request.project_name, report=report)
