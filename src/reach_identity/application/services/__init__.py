"""Identity application services."""

from reach_identity.application.services.authentication_service import (
    AuthenticationService,
)
from reach_identity.application.services.identity_resolver import IdentityResolver
from reach_identity.application.services.password_reset_service import (
    PasswordResetService,
)

__all__ = [
    "AuthenticationService",
    "IdentityResolver",
    "PasswordResetService",
]
