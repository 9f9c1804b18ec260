"""Value objects for the user domain having identity concerns only."""

from reach_identity.domain.user.value_objects.auth_provider import AuthProvider
from reach_identity.domain.user.value_objects.email import Email

__all__ = [
    "AuthProvider",
    "Email",
]
