"""Reach Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the user domain. It handles:
- Password hashing (bcrypt)
- Session, activation and OAuth state tokens (JWT)
- Password reset secrets and their lookup digests

Architecture:
    reach_auth/
    ├── services/           # Pure logic (password hashing, JWT, reset secrets)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from reach_auth import JWTService, PasswordHashingService, ResetSecretService
"""

from reach_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenExpiredError,
    TokenInvalidError,
    WeakPasswordError,
)
from reach_auth.schemas import ResetSecret, TokenPayload
from reach_auth.services import (
    JWTService,
    PasswordHashingService,
    ResetSecretService,
)

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "ResetSecretService",
    # Schemas
    "ResetSecret",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "WeakPasswordError",
]
