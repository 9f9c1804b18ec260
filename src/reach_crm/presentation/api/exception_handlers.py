"""Centralized exception handlers for the FastAPI application.

Domain exceptions and reach_auth errors are mapped to HTTP responses with
a consistent error format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Server-side failures (status 500) always answer with the generic message
and ``SERVER_ERROR``; their details only reach the log.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reach_auth import AuthError
from reach_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred"


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[str, int] = {
    # 400 Bad Request - validation, duplicates and token errors
    ErrorCode.INVALID_BODY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_IDENTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SOCIAL_LOGIN_NO_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ACTIVATION_TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RESET_TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.ACCOUNT_DISABLED: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONTACT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 500 Internal Server Error
    ErrorCode.OAUTH_PROVIDER_NOT_CONFIGURED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.OAUTH_EXCHANGE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (ConflictError, ValidationError)):
        return status.HTTP_400_BAD_REQUEST

    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = _get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Server-side domain error on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )
            return _create_error_response(
                status_code=status_code,
                message=GENERIC_SERVER_ERROR,
                code=ErrorCode.SERVER_ERROR.value,
            )

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle reach_auth errors (weak passwords, unusable tokens)."""
        status_code = ERROR_CODE_TO_STATUS.get(
            exc.code,
            status.HTTP_400_BAD_REQUEST,
        )
        logger.warning(
            "Auth error on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code,
        )
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies as 400 INVALID_BODY."""
        logger.warning(
            "Invalid request on %s %s: %s",
            request.method,
            request.url.path,
            # Field locations only; inputs may hold passwords
            [(e.get("loc"), e.get("type")) for e in exc.errors()],
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Invalid authentication request body",
            code=ErrorCode.INVALID_BODY.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for anything the handlers above do not cover."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=GENERIC_SERVER_ERROR,
            code=ErrorCode.SERVER_ERROR.value,
        )
