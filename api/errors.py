"""
API Error Handling

Standardized error handling for the API.

Service exceptions (AllowlistException) are rendered with the same envelope
as APIError; the status code depends on the error code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import AllowlistException, ErrorCodes

logger = logging.getLogger(__name__)

# Anything not listed is a client error (400)
_STATUS_BY_CODE = {
    ErrorCodes.UNKNOWN_ROOT: 404,
    ErrorCodes.DUPLICATE_ROOT: 409,
    ErrorCodes.STORED_TREE_MISMATCH: 500,
}


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
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class NotFoundError(APIError):
    """Requested resource does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


def status_for(exc: AllowlistException) -> int:
    return _STATUS_BY_CODE.get(exc.code, 400)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def service_error_handler(request: Request, exc: AllowlistException) -> JSONResponse:
    """Handle exceptions raised by the allowlist service."""
    error = exc.to_error_model()
    return JSONResponse(
        status_code=status_for(exc),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=error.code,
                message=error.message,
                details=error.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
