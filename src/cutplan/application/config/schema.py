"""Pydantic models for optimizer configuration files.

Example configuration::

    {
      "schema_version": "1.0",
      "sheet": {"width": 2750, "height": 1850},
      "packing": {
        "default_thickness": "18",
        "oversized_policy": "reject",
        "max_instances": 50000
      },
      "output": {"format": "summary", "svg_scale": 0.2}
    }
"""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from cutplan.domain import DEFAULT_SHEET_HEIGHT, DEFAULT_SHEET_WIDTH, DEFAULT_THICKNESS
from cutplan.infrastructure.bin_packing import DEFAULT_MAX_INSTANCES

# Supported schema versions for configuration files
# Version 1.0: Initial schema with sheet, packing and output sections
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class OversizedPolicyConfig(str, Enum):
    """Handling of pieces larger than the sheet."""

    REJECT = "reject"
    PLACE = "place"


class OutputFormatConfig(str, Enum):
    """Console output formats for the optimize command."""

    SUMMARY = "summary"
    JSON = "json"
    ASCII = "ascii"
    SVG = "svg"


class SheetSizeConfig(BaseModel):
    """Stock sheet dimensions in mm.

    Attributes:
        width: Sheet width (default 2750).
        height: Sheet height (default 1850).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=DEFAULT_SHEET_WIDTH, gt=0, le=10000, description="Sheet width in mm"
    )
    height: float = Field(
        default=DEFAULT_SHEET_HEIGHT, gt=0, le=10000, description="Sheet height in mm"
    )


class PackingConfig(BaseModel):
    """Packing behaviour.

    Attributes:
        default_thickness: Thickness for pieces that do not declare one.
        oversized_policy: "reject" raises an error for pieces larger than
            the sheet, "place" places them anyway (legacy behaviour).
        max_instances: Maximum expanded pieces per run; null disables.
    """

    model_config = ConfigDict(extra="forbid")

    default_thickness: str = Field(
        default=DEFAULT_THICKNESS, min_length=1, description="Default thickness"
    )
    oversized_policy: OversizedPolicyConfig = Field(
        default=OversizedPolicyConfig.REJECT,
        description="Handling of pieces larger than the sheet",
    )
    max_instances: int | None = Field(
        default=DEFAULT_MAX_INSTANCES,
        ge=1,
        description="Maximum expanded pieces per run (null for no limit)",
    )


class OutputConfig(BaseModel):
    """Output preferences for the command line.

    Attributes:
        format: Default console output format.
        svg_scale: Pixels per mm in SVG diagrams.
    """

    model_config = ConfigDict(extra="forbid")

    format: OutputFormatConfig = Field(
        default=OutputFormatConfig.SUMMARY, description="Console output format"
    )
    svg_scale: float = Field(
        default=0.2, gt=0, le=10, description="Pixels per mm in SVG output"
    )


class OptimizerConfiguration(BaseModel):
    """Root configuration model.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        sheet: Sheet size
        packing: Packing behaviour
        output: Output preferences
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    sheet: SheetSizeConfig = Field(default_factory=SheetSizeConfig)
    packing: PackingConfig = Field(default_factory=PackingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
