"""
API Error Handling

Standardized error handling for the API.

Verification failures are not errors here: they are returned as
VerifyResponse bodies. These handlers cover malformed requests and
unexpected server faults.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, VerifierException


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
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestFormatError(APIError):
    """Request body could not be parsed as a signed SMS request."""

    def __init__(self, message: str = "Failed to parse SMS request", details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST_FORMAT",
            message=message,
            status_code=400,
            details=details,
        )


class ServiceUnavailableError(APIError):
    """Verifier not initialized."""

    def __init__(self, message: str = "Verifier is not initialized"):
        super().__init__(
            code="SERVICE_UNAVAILABLE",
            message=message,
            status_code=503,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as INVALID_REQUEST_FORMAT."""
    logger.error(f"Invalid request format: {exc.errors()}")
    error = InvalidRequestFormatError(
        details={"errors": [str(e.get("msg", "")) for e in exc.errors()]},
    )
    return await api_error_handler(request, error)


async def verifier_error_handler(request: Request, exc: VerifierException) -> JSONResponse:
    """Render verifier building-block errors through their structured model."""
    error = exc.to_error_model()
    logger.error(f"Verifier error {error.code}: {error.message}")
    status_code = 503 if error.code == ErrorCodes.KEY_INITIALIZATION_ERROR else 400
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=error.code,
                message=error.message,
                details={**error.details, "retryable": error.retryable},
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Error processing request: {exc}", exc_info=exc)
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
