"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutplan.domain import InputLimitError, PieceTooLargeError, ProjectParseError


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


def _error(status_code: int, error: str, error_type: str, details: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "error_type": error_type,
            "details": details,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(PieceTooLargeError)
    async def piece_too_large_handler(
        request: Request, exc: PieceTooLargeError
    ) -> JSONResponse:
        return _error(
            422,
            str(exc),
            "piece_too_large",
            {
                "piece_id": exc.piece_id,
                "width": exc.width,
                "height": exc.height,
                "sheet_width": exc.sheet_width,
                "sheet_height": exc.sheet_height,
            },
        )

    @app.exception_handler(InputLimitError)
    async def input_limit_handler(request: Request, exc: InputLimitError) -> JSONResponse:
        return _error(
            413,
            str(exc),
            "input_limit",
            {"count": exc.count, "limit": exc.limit},
        )

    @app.exception_handler(ProjectParseError)
    async def project_parse_handler(
        request: Request, exc: ProjectParseError
    ) -> JSONResponse:
        return _error(
            400,
            exc.message,
            "project_parse",
            {"line": exc.line} if exc.line is not None else None,
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return _error(
            400,
            str(exc),
            "unsupported_format",
            {"format": exc.format_name, "available": exc.available},
        )
