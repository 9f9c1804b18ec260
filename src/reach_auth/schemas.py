"""Data classes shared by the auth services."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

SESSION_TOKEN_TYPE = "session"
ACTIVATION_TOKEN_TYPE = "activation"
STATE_TOKEN_TYPE = "oauth_state"  # noqa: S105


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token.

    ``user`` is the sanitized user record embedded at issuance time and
    stands in for the authenticated identity.
    """

    user_id: UUID
    exp: datetime
    token_type: str = SESSION_TOKEN_TYPE
    user: dict[str, Any] = field(default_factory=dict)

    def is_session_token(self) -> bool:
        return self.token_type == SESSION_TOKEN_TYPE


@dataclass(frozen=True)
class ResetSecret:
    """A freshly issued password reset secret.

    ``secret`` goes to the user by email; only ``secret_hash`` is stored.
    """

    secret: str
    secret_hash: str
