"""Pydantic schemas for the REST API."""

from cutplan.web.schemas.requests import OptimizeRequest
from cutplan.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    OptimizeResponseSchema,
    PlacedPieceSchema,
    SheetLayoutSchema,
)

__all__ = [
    # Requests
    "OptimizeRequest",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "OptimizeResponseSchema",
    "PlacedPieceSchema",
    "SheetLayoutSchema",
]
