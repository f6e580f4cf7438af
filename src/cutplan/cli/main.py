"""Typer CLI for cut optimization."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError as PydanticValidationError

from cutplan.application import (
    OptimizeCutsCommand,
    OptimizeCutsInput,
    OptimizeCutsOutput,
)
from cutplan.application.config import (
    ConfigError,
    OptimizerConfiguration,
    OutputFormatConfig,
    OversizedPolicyConfig,
    config_to_optimizer,
    load_config,
    merge_config_with_cli,
)
from cutplan.cli.commands import validate_command
from cutplan.domain import CutOptimizationError
from cutplan.infrastructure import CutDiagramRenderer, CutOptimizationService
from cutplan.infrastructure.exporters import ExporterRegistry, ExportManager


def _load_input(input_file: Path, project_name: str) -> OptimizeCutsInput:
    """Build the optimization request from a project XML or JSON file.

    JSON files hold either a list of piece records or an object with a
    ``pieces`` list.
    """
    if input_file.suffix.lower() == ".xml":
        try:
            xml_data = input_file.read_bytes()
        except OSError as e:
            raise ValueError(f"Cannot read {input_file}: {e}")
        return OptimizeCutsInput(project_name=project_name, xml_data=xml_data)

    try:
        data: Any = json.loads(input_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"Cannot read {input_file}: {e}")
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {input_file} (line {e.lineno}, column {e.colno}): {e.msg}"
        )

    if isinstance(data, dict):
        data = data.get("pieces")
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(
            f"{input_file} must contain a list of pieces or an object with a 'pieces' list"
        )
    return OptimizeCutsInput(project_name=project_name, pieces=data)


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    result: OptimizeCutsOutput,
) -> None:
    """Handle multi-format export via --output-formats option.

    Args:
        output_formats_str: Comma-separated format list or "all".
        output_dir: Output directory for exported files.
        project_name: Project name for file naming.
        result: The optimization output to export.
    """
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, result, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


def _render(
    result: OptimizeCutsOutput,
    output_format: OutputFormatConfig,
    svg_scale: float,
) -> str:
    renderer = CutDiagramRenderer(scale=svg_scale)
    if output_format == OutputFormatConfig.JSON:
        return json.dumps(result.to_dict(), indent=2)
    if output_format == OutputFormatConfig.ASCII:
        return renderer.render_all_ascii(result.report)
    if output_format == OutputFormatConfig.SVG:
        return renderer.render_combined_svg(result.report)
    return renderer.render_waste_summary(result.report)


app = typer.Typer(
    name="cutplan",
    help="Plan how rectangular pieces are cut from stock sheets.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.command()
def optimize(
    input_file: Annotated[
        Path,
        typer.Argument(help="Project XML file, or JSON file with piece records"),
    ],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Sheet width in mm"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Sheet height in mm"),
    ] = None,
    oversized: Annotated[
        OversizedPolicyConfig | None,
        typer.Option("--oversized", help="Pieces larger than the sheet: reject or place"),
    ] = None,
    output_format: Annotated[
        OutputFormatConfig | None,
        typer.Option("--format", "-f", help="Output format: summary, json, ascii, svg"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: dxf,json,svg,txt (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Project name (defaults to the input file name)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing progress to stderr"),
    ] = False,
) -> None:
    """Optimize the cut plan for a project.

    Reads piece records, packs them onto sheets grouped by thickness and
    prints the resulting plan.

    Example:
        cutplan optimize kitchen.xml --format ascii
        cutplan optimize pieces.json -c shop.json --output-formats all
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not input_file.exists():
        typer.echo(f"Error: Input file not found: {input_file}", err=True)
        raise typer.Exit(code=1)

    try:
        config = (
            load_config(config_file)
            if config_file is not None
            else OptimizerConfiguration(schema_version="1.0")
        )
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        config = merge_config_with_cli(
            config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            oversized_policy=oversized.value if oversized is not None else None,
            output_format=output_format.value if output_format is not None else None,
        )
    except PydanticValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            typer.echo(f"Error: {location}: {error['msg']}", err=True)
        raise typer.Exit(code=1)

    name = project_name or input_file.stem
    try:
        request = _load_input(input_file, name)
        command = OptimizeCutsCommand(
            service=CutOptimizationService(config_to_optimizer(config))
        )
        result = command.execute(request)
    except (CutOptimizationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_formats:
        _handle_multi_format_export(output_formats, output_dir, name, result)
        return

    rendered = _render(result, config.output.format, config.output.svg_scale)
    if output_file is not None:
        try:
            output_file.write_text(rendered, encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: Cannot write {output_file}: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Output written to: {output_file}")
    else:
        typer.echo(rendered)


if __name__ == "__main__":
    app()
