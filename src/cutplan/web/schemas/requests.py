"""Pydantic request schemas for the REST API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OptimizeRequest(BaseModel):
    """Request for optimizing the cut plan of a project.

    Exactly one of ``xmlData`` or ``pieces`` must be provided.
    """

    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(..., alias="projectName", description="Project name")
    xml_data: str | None = Field(
        default=None, alias="xmlData", description="Project XML document"
    )
    pieces: list[dict[str, Any]] | None = Field(
        default=None, description="Piece records (width/largura, height/altura, ...)"
    )
    sheet_width: float | None = Field(
        default=None, alias="sheetWidth", gt=0, le=10000, description="Sheet width in mm"
    )
    sheet_height: float | None = Field(
        default=None, alias="sheetHeight", gt=0, le=10000, description="Sheet height in mm"
    )
    oversized_policy: Literal["reject", "place"] | None = Field(
        default=None,
        alias="oversizedPolicy",
        description="Handling of pieces larger than the sheet",
    )

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Project name must not be blank")
        return v

    @model_validator(mode="after")
    def validate_single_source(self) -> "OptimizeRequest":
        if (self.xml_data is None) == (self.pieces is None):
            raise ValueError("Provide exactly one of xmlData or pieces")
        return self
