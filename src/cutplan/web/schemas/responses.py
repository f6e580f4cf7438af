"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PlacedPieceSchema(BaseModel):
    """A piece placed on a sheet. Coordinates are from the top-left corner."""

    id: str = Field(..., description="Piece instance id")
    width: int | float = Field(..., description="Width in mm")
    height: int | float = Field(..., description="Height in mm")
    area: int | float = Field(..., description="Area in mm²")
    x: int | float = Field(..., description="Left edge in mm")
    y: int | float = Field(..., description="Top edge in mm")


class SheetLayoutSchema(BaseModel):
    """One stock sheet and its placed pieces."""

    model_config = ConfigDict(populate_by_name=True)

    sheet_index: int = Field(..., alias="sheetIndex", description="1-based sheet number")
    thickness: str = Field(..., description="Thickness shared by all pieces")
    pieces: list[PlacedPieceSchema] = Field(default_factory=list)


class OptimizeResponseSchema(BaseModel):
    """Response for cut optimization."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True)
    project_name: str = Field(..., alias="projectName", description="Project name")
    total_sheets: int = Field(..., alias="totalSheets", description="Sheets used")
    waste_percentage: int | float = Field(
        ..., alias="wastePercentage", description="Overall waste, 2 decimal places"
    )
    layouts: list[SheetLayoutSchema] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Error response."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")


class ExportFormatsSchema(BaseModel):
    """Available export formats."""

    formats: list[str] = Field(..., description="List of available format names")
