"""DTO for an identity asserted by an OAuth provider."""

from dataclasses import dataclass

from reach_identity.domain.user import AuthProvider


@dataclass(frozen=True)
class OAuthProfile:
    """Provider profile obtained after a successful code exchange.

    ``email`` is None when the provider withheld it.
    """

    provider: AuthProvider
    external_id: str
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
