from enum import Enum


class AuthProvider(str, Enum):
    """OAuth providers a user identity can be linked to."""

    GOOGLE = "google"
    GITHUB = "github"
    FACEBOOK = "facebook"

    @property
    def is_trusted(self) -> bool:
        """Whether profiles from this provider count as email-verified."""
        return self is AuthProvider.GOOGLE
