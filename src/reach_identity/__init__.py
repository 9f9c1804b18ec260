"""Reach Identity - User identity, credentials and session flows.

This module handles all identity-related concerns:
- User aggregate and the credential store (SQLAlchemy)
- Signup, login, activation and password change
- Password reset with hashed, single-use reset secrets
- OAuth account linking (Google, GitHub, Facebook)
- Email notifications (activation, password reset)

Token signing and password hashing live in reach_auth, which knows
nothing about users.
"""

from reach_identity.application.dtos import OAuthProfile
from reach_identity.application.services import (
    AuthenticationService,
    IdentityResolver,
    PasswordResetService,
)
from reach_identity.domain.user import (
    AuthProvider,
    DuplicateIdentityError,
    Email,
    InvalidEmailError,
    User,
    UserNotFoundError,
    UserRepository,
)
from reach_identity.exceptions import (
    AccountDisabledError,
    ActivationTokenInvalidError,
    InvalidBodyError,
    InvalidCredentialsError,
    OAuthExchangeError,
    OAuthProviderNotConfiguredError,
    ResetTokenInvalidError,
    SocialLoginNoPasswordError,
    UnauthorizedError,
)

__all__ = [
    # Domain - User
    "AuthProvider",
    "DuplicateIdentityError",
    "Email",
    "InvalidEmailError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    # Exceptions
    "AccountDisabledError",
    "ActivationTokenInvalidError",
    "InvalidBodyError",
    "InvalidCredentialsError",
    "OAuthExchangeError",
    "OAuthProviderNotConfiguredError",
    "ResetTokenInvalidError",
    "SocialLoginNoPasswordError",
    "UnauthorizedError",
    # DTOs
    "OAuthProfile",
    # Application Services
    "AuthenticationService",
    "IdentityResolver",
    "PasswordResetService",
]
