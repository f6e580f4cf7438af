"""Cut optimization endpoints."""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response

from cutplan.application import (
    OptimizeCutsCommand,
    OptimizeCutsInput,
    OptimizeCutsOutput,
)
from cutplan.application.config import (
    OptimizerConfiguration,
    config_to_optimizer,
    merge_config_with_cli,
)
from cutplan.infrastructure import CutOptimizationService
from cutplan.infrastructure.exporters import ExporterRegistry, SvgExporter
from cutplan.infrastructure.xml_parser import ProjectXmlParser
from cutplan.web.dependencies import BaseConfigDep, XmlParserDep
from cutplan.web.exceptions import UnsupportedFormatError
from cutplan.web.schemas.requests import OptimizeRequest
from cutplan.web.schemas.responses import ExportFormatsSchema, OptimizeResponseSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])

MEDIA_TYPES: dict[str, str] = {
    "dxf": "application/dxf",
    "json": "application/json",
    "svg": "image/svg+xml",
    "txt": "text/plain",
}


def _merged_config(
    request: OptimizeRequest, base: OptimizerConfiguration
) -> OptimizerConfiguration:
    return merge_config_with_cli(
        base,
        sheet_width=request.sheet_width,
        sheet_height=request.sheet_height,
        oversized_policy=request.oversized_policy,
    )


def _run(
    request: OptimizeRequest,
    config: OptimizerConfiguration,
    parser: ProjectXmlParser,
) -> OptimizeCutsOutput:
    """Helper to run the optimization for a request."""
    command = OptimizeCutsCommand(
        service=CutOptimizationService(config_to_optimizer(config)),
        parser=parser,
    )
    return command.execute(
        OptimizeCutsInput(
            project_name=request.project_name,
            pieces=request.pieces,
            xml_data=request.xml_data,
        )
    )


@router.post("", response_model=OptimizeResponseSchema)
def optimize(
    request: OptimizeRequest,
    base_config: BaseConfigDep,
    parser: XmlParserDep,
) -> dict[str, Any]:
    """Optimize the cut plan for a project.

    Args:
        request: Project name plus project XML or piece records.
        base_config: Injected default configuration.
        parser: Injected project XML parser.

    Returns:
        Sheet layouts, sheet count and overall waste.
    """
    config = _merged_config(request, base_config)
    return _run(request, config, parser).to_dict()


@router.post("/svg")
def optimize_svg(
    request: OptimizeRequest,
    base_config: BaseConfigDep,
    parser: XmlParserDep,
) -> Response:
    """Optimize the cut plan and return the combined SVG cut diagram."""
    config = _merged_config(request, base_config)
    output = _run(request, config, parser)
    exporter = SvgExporter(scale=config.output.svg_scale)
    return Response(content=exporter.export_string(output), media_type="image/svg+xml")


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}")
def optimize_export(
    format_name: str,
    request: OptimizeRequest,
    base_config: BaseConfigDep,
    parser: XmlParserDep,
) -> Response:
    """Optimize the cut plan and return it in a registered export format.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format.
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    config = _merged_config(request, base_config)
    output = _run(request, config, parser)
    exporter = ExporterRegistry.get(format_name)()
    filename = f"{request.project_name}_{format_name}.{exporter.file_extension}"
    return Response(
        content=exporter.export_string(output),
        media_type=MEDIA_TYPES.get(format_name, "application/octet-stream"),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
