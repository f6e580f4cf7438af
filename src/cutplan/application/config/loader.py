"""Loading optimizer configuration files.

A configuration file is JSON validated against ``OptimizerConfiguration``.
Every failure surfaces as a ``ConfigError`` whose ``error_type`` tells the
caller what went wrong, and whose ``details`` list one entry per problem.
Validation details carry a ``hint`` for the settings shop users most often
get wrong (sheet size, piece limit, oversized policy).
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutplan.application.config.schema import (
    SUPPORTED_VERSIONS,
    OptimizerConfiguration,
    OutputFormatConfig,
    OversizedPolicyConfig,
)

_FIELD_HINTS: dict[str, str] = {
    "schema_version": f"use one of: {', '.join(sorted(SUPPORTED_VERSIONS))}",
    "sheet.width": "stock sheet width in mm, above 0 and at most 10000",
    "sheet.height": "stock sheet height in mm, above 0 and at most 10000",
    "packing.default_thickness": "thickness tag for pieces without one, e.g. \"18\"",
    "packing.oversized_policy": (
        f"one of: {', '.join(p.value for p in OversizedPolicyConfig)}"
    ),
    "packing.max_instances": (
        "largest number of expanded pieces per run, at least 1, or null for no limit"
    ),
    "output.format": f"one of: {', '.join(f.value for f in OutputFormatConfig)}",
    "output.svg_scale": "pixels per mm in SVG output, above 0 and at most 10",
}


class ConfigError(Exception):
    """Raised when a configuration file cannot be used.

    Attributes:
        message: Human-readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: Configuration file, when loading from disk.
        details: One dict per problem. JSON errors carry line/column,
            validation errors carry path/message/value/hint.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Join a pydantic error location into a dotted path.

    Examples:
        >>> _format_json_path(("sheet", "width"))
        'sheet.width'
        >>> _format_json_path(("items", 0, "width"))
        'items[0].width'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _problem(err: dict[str, Any]) -> dict[str, Any]:
    path = _format_json_path(err["loc"])
    problem = {
        "path": path,
        "message": err["msg"],
        "value": err.get("input"),
        "error_type": err["type"],
    }
    hint = _FIELD_HINTS.get(path)
    if hint is not None:
        problem["hint"] = hint
    return problem


def _validate(data: Any, path: Path | None) -> OptimizerConfiguration:
    try:
        return OptimizerConfiguration.model_validate(data)
    except PydanticValidationError as e:
        problems = [_problem(err) for err in e.errors()]

    source = f" in {path}" if path is not None else ""
    lines = [f"Invalid optimizer configuration{source}:"]
    for problem in problems:
        line = f"  - {problem['path']}: {problem['message']}"
        if "hint" in problem:
            line += f" ({problem['hint']})"
        lines.append(line)
    raise ConfigError("\n".join(lines), "validation", path, problems)


def load_config(path: Path) -> OptimizerConfiguration:
    """Load and validate an optimizer configuration from a JSON file.

    Raises:
        ConfigError: With error_type file_not_found, permission_denied,
            file_read_error, json_parse or validation.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        )
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", "file_read_error", path)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> OptimizerConfiguration:
    """Validate an already-parsed configuration mapping.

    Raises:
        ConfigError: With error_type validation.
    """
    return _validate(data, None)
