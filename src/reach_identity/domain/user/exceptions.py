"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from reach_identity.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MissingIdentifierError(ValidationError):
    """Raised when a user would be created with neither email nor mobile."""

    def __init__(self) -> None:
        super().__init__("Either an email address or a mobile number is required")


class DuplicateIdentityError(ConflictError):
    """Email or mobile number already registered."""

    def __init__(self, identifier: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(
            "User already exists",
            details={"identifier": identifier} if identifier else None,
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id
        super().__init__(
            "User not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id} if user_id else None,
        )
