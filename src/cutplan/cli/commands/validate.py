"""Validate command for checking configuration files.

This module provides the `validate` command that checks a JSON configuration
file for syntax and schema errors.
"""

from pathlib import Path
from typing import Annotated, Any

import typer

from cutplan.application.config import (
    ConfigError,
    OptimizerConfiguration,
    load_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate an optimizer configuration file.

    Checks the configuration file for:
    - JSON syntax errors
    - Schema validation errors (unknown keys, invalid types, ranges, etc.)

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors (cannot be used)

    Example:
        cutplan validate shop.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    _display_config(config)
    typer.echo()
    typer.echo("Configuration is valid.")


def _describe(detail: dict[str, Any]) -> list[str]:
    """Lines describing one problem from a ConfigError's details."""
    if "line" in detail:
        return [f"line {detail['line']}, column {detail['column']}: {detail['message']}"]
    lines = [f"{detail['path']}: {detail['message']}"]
    if detail.get("value") is not None:
        lines.append(f"  got {detail['value']!r}")
    if "hint" in detail:
        lines.append(f"  expected {detail['hint']}")
    return lines


def _display_load_error(error: ConfigError) -> None:
    if error.error_type == "file_not_found":
        typer.echo(f"File not found: {error.path}", err=True)
    elif not error.details:
        typer.echo(error.message, err=True)
    else:
        heading = "Invalid JSON syntax" if error.error_type == "json_parse" else "Errors"
        typer.echo(f"{heading} in {error.path}:", err=True)
        for detail in error.details:
            for line in _describe(detail):
                typer.echo(f"  {line}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _display_config(config: OptimizerConfiguration) -> None:
    typer.echo(f"Schema version: {config.schema_version}")
    typer.echo(f"Sheet: {config.sheet.width:g} x {config.sheet.height:g} mm")
    typer.echo(f"Default thickness: {config.packing.default_thickness}")
    typer.echo(f"Oversized pieces: {config.packing.oversized_policy.value}")
    limit = config.packing.max_instances
    typer.echo(f"Max pieces: {limit if limit is not None else 'unlimited'}")
