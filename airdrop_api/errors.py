"""
API Error Handling

Standardized error handling for the API.
Ledger and builder rejections keep their machine-readable codes and map to
fixed HTTP statuses.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from airdrop.schemas.errors import AirdropException, ErrorCodes
from airdrop_api.models.responses import ErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.EMPTY_SET: 400,
    ErrorCodes.INVALID_ADDRESS: 400,
    ErrorCodes.NOT_IN_SET: 404,
    ErrorCodes.NOT_WHITELISTED: 403,
    ErrorCodes.UNAUTHORIZED: 403,
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.LEDGER_STATE: 409,
    ErrorCodes.SUPPLY_EXHAUSTED: 409,
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
    """No acting address supplied."""

    def __init__(self, message: str = "X-Caller-Address header is required"):
        super().__init__(
            code="MISSING_CALLER",
            message=message,
            status_code=401,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def airdrop_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle ledger and builder rejections."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
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
