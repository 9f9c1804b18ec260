"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
domain layer. All domain exceptions inherit from DomainException so the
presentation layer can translate them centrally.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    INVALID_BODY = "INVALID_BODY"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    PASSWORD_TOO_WEAK = "PASSWORD_TOO_WEAK"
    SOCIAL_LOGIN_NO_PASSWORD = "SOCIAL_LOGIN_NO_PASSWORD"

    # Token Errors (400)
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    ACTIVATION_TOKEN_INVALID = "ACTIVATION_TOKEN_INVALID"
    RESET_TOKEN_INVALID = "RESET_TOKEN_INVALID"

    # Authentication Errors (401)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Authorization Errors (403)
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CONTACT_NOT_FOUND = "CONTACT_NOT_FOUND"

    # OAuth provider errors (500)
    OAUTH_PROVIDER_NOT_CONFIGURED = "OAUTH_PROVIDER_NOT_CONFIGURED"
    OAUTH_EXCHANGE_FAILED = "OAUTH_EXCHANGE_FAILED"

    # General Errors
    SERVER_ERROR = "SERVER_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_BODY,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DUPLICATE_IDENTITY,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
