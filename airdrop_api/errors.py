"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from airdrop.schemas.errors import AirdropException, ErrorCodes
from airdrop_api.models.responses import ErrorResponse, ErrorDetail


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


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class MissingCallerError(APIError):
    """The caller identity header was not provided."""

    def __init__(self, header: str):
        super().__init__(
            code="MISSING_CALLER",
            message=f"Caller identity header '{header}' is required",
            status_code=400,
            details={"header": header},
        )


# Contract errors -> HTTP status
_STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.ALREADY_INITIALIZED: 409,
    ErrorCodes.NOT_INITIALIZED: 409,
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.CLAIM_REJECTED: 409,
    ErrorCodes.TRANSFER_FAILED: 502,
}


def status_for(exc: AirdropException) -> int:
    """HTTP status for a domain exception (400 unless listed)."""
    return _STATUS_BY_CODE.get(exc.code, 400)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def airdrop_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle domain exceptions raised by the contract."""
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
