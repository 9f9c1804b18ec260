"""Authentication services.

Provides password hashing, JWT token management and reset secrets.
"""

from reach_auth.services.jwt_service import JWTService
from reach_auth.services.password_service import PasswordHashingService
from reach_auth.services.reset_secret_service import ResetSecretService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "ResetSecretService",
]
