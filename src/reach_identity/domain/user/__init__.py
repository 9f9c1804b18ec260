"""User domain manages user identity only.

This domain handles:
- User aggregate (identity, local credential, provider links, reset state)
- Credential store interface
"""

from reach_identity.domain.user.aggregates import DEFAULT_DISPLAY_NAME, User
from reach_identity.domain.user.exceptions import (
    DuplicateIdentityError,
    InvalidEmailError,
    MissingIdentifierError,
    UserNotFoundError,
)
from reach_identity.domain.user.repositories import UserRepository
from reach_identity.domain.user.value_objects import AuthProvider, Email

__all__ = [
    "DEFAULT_DISPLAY_NAME",
    "AuthProvider",
    "DuplicateIdentityError",
    "Email",
    "InvalidEmailError",
    "MissingIdentifierError",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
