"""Identity and authentication flow exceptions.

These exceptions are raised by the reach_identity application services
and translated into HTTP responses by the API exception handlers.
Messages are safe to show to end users.
"""

from typing import Any

from reach_identity.domain.shared.exceptions import DomainException, ErrorCode


class InvalidBodyError(DomainException):
    """Raised when required request fields are missing or malformed."""

    def __init__(
        self,
        message: str = "Invalid authentication request body",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.INVALID_BODY, details)


class InvalidCredentialsError(DomainException):
    """Raised for a wrong password and for an unknown identifier alike."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class AccountDisabledError(DomainException):
    """Raised when a pending or deactivated account tries to log in."""

    def __init__(self, message: str = "Account is disabled"):
        super().__init__(message, ErrorCode.ACCOUNT_DISABLED)


class UnauthorizedError(DomainException):
    """Raised when the caller is not (or no longer) authenticated."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, ErrorCode.UNAUTHORIZED)


class ActivationTokenInvalidError(DomainException):
    """Raised when an activation token is invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.ACTIVATION_TOKEN_INVALID)


class ResetTokenInvalidError(DomainException):
    """Raised when a password reset token is unknown, used or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.RESET_TOKEN_INVALID)


class SocialLoginNoPasswordError(DomainException):
    """Raised when a password operation targets an OAuth-only account."""

    def __init__(self, message: str = "Cannot change password for social login"):
        super().__init__(message, ErrorCode.SOCIAL_LOGIN_NO_PASSWORD)


class OAuthProviderNotConfiguredError(DomainException):
    """Raised when a provider's client credentials are missing."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"OAuth provider '{provider}' is not configured",
            ErrorCode.OAUTH_PROVIDER_NOT_CONFIGURED,
            details={"provider": provider},
        )


class OAuthExchangeError(DomainException):
    """Raised when the provider rejects the code exchange or profile fetch."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        super().__init__(
            f"Authentication with {provider} failed",
            ErrorCode.OAUTH_EXCHANGE_FAILED,
            details={"provider": provider, "reason": reason},
        )
