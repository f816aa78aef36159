"""
API Error Handling

Standardized error handling for the API.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            success=False,
            error=self.message,
            code=self.code,
            details=self.details,
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST", details: dict[str, Any] | None = None):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details,
        )


class MissingFileError(APIError):
    """Required file not provided."""

    def __init__(self, message: str = "No file provided"):
        super().__init__(
            code="MISSING_FILE",
            message=message,
            status_code=400,
        )


class NotFoundError(APIError):
    """Requested record or file does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            success=False,
            error="An unexpected error occurred",
            code="INTERNAL_ERROR",
            details={"type": type(exc).__name__},
        ).model_dump(),
    )
