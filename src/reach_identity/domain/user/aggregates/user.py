"""User aggregate for identity concerns only."""

from datetime import datetime
from typing import Any, Union
from uuid import UUID, uuid4

from reach_identity.domain.shared.time import ensure_tz_aware, utc_now
from reach_identity.domain.user.exceptions import MissingIdentifierError
from reach_identity.domain.user.value_objects import AuthProvider, Email

DEFAULT_DISPLAY_NAME = "No Name"


def _normalize_mobile(mobile: str | None) -> str | None:
    if mobile is None:
        return None
    cleaned = "".join(mobile.split())
    return cleaned or None


class User:
    """
    User aggregate root.

    Holds the identity, the local credential (a bcrypt hash, or None for
    accounts that only sign in through an OAuth provider), the provider
    links and the password reset state.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email, None] = None,
        mobile: str | None = None,
        name: str = DEFAULT_DISPLAY_NAME,
        password_hash: str | None = None,
        provider_ids: dict[AuthProvider, str] | None = None,
        avatar_url: str | None = None,
        is_active: bool = False,
        email_verified: bool = False,
        last_login_at: datetime | None = None,
        reset_token: str | None = None,
        reset_token_expiry: datetime | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        if email is None or isinstance(email, Email):
            self._email = email
        else:
            self._email = Email(email)
        self._mobile = _normalize_mobile(mobile)
        self._name = name or DEFAULT_DISPLAY_NAME
        self._password_hash = password_hash
        self._provider_ids = {
            AuthProvider(provider): external_id
            for provider, external_id in (provider_ids or {}).items()
            if external_id
        }
        self._avatar_url = avatar_url
        self._is_active = is_active
        self._email_verified = email_verified
        self._last_login_at = last_login_at
        self._reset_token = reset_token
        self._reset_token_expiry = reset_token_expiry
        self._id = id or uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str | None:
        return self._email.value if self._email else None

    @property
    def mobile(self) -> str | None:
        return self._mobile

    @property
    def name(self) -> str:
        return self._name

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def has_password(self) -> bool:
        return self._password_hash is not None

    @property
    def provider_ids(self) -> dict[AuthProvider, str]:
        return dict(self._provider_ids)

    def provider_id(self, provider: AuthProvider) -> str | None:
        return self._provider_ids.get(provider)

    @property
    def google_id(self) -> str | None:
        return self.provider_id(AuthProvider.GOOGLE)

    @property
    def github_id(self) -> str | None:
        return self.provider_id(AuthProvider.GITHUB)

    @property
    def facebook_id(self) -> str | None:
        return self.provider_id(AuthProvider.FACEBOOK)

    @property
    def avatar_url(self) -> str | None:
        return self._avatar_url

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def last_login_at(self) -> datetime | None:
        return self._last_login_at

    @property
    def reset_token(self) -> str | None:
        return self._reset_token

    @property
    def reset_token_expiry(self) -> datetime | None:
        return self._reset_token_expiry

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def activate(self) -> None:
        """Mark the account active; the activation link proves the email."""
        self._is_active = True
        self._email_verified = True
        self._touch()

    def link_provider(self, provider: AuthProvider, external_id: str) -> None:
        """Attach an OAuth provider's external id. Other links are kept."""
        if self._provider_ids.get(provider) == external_id:
            return
        self._provider_ids[provider] = external_id
        self._touch()

    def record_login(self, at: datetime | None = None) -> None:
        self._last_login_at = at or utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def start_password_reset(self, token_hash: str, expires_at: datetime) -> None:
        """Store the digest of a new reset secret, replacing any previous one."""
        self._reset_token = token_hash
        self._reset_token_expiry = expires_at
        self._touch()

    def complete_password_reset(self, password_hash: str) -> None:
        """Set the new password and consume the reset token in one step."""
        self._password_hash = password_hash
        self._reset_token = None
        self._reset_token_expiry = None
        self._touch()

    def has_live_reset_token(self, token_hash: str, now: datetime | None = None) -> bool:
        if self._reset_token is None or self._reset_token_expiry is None:
            return False
        now = now or utc_now()
        return (
            self._reset_token == token_hash
            and ensure_tz_aware(self._reset_token_expiry) > now
        )

    def to_public_dict(self) -> dict[str, Any]:
        """Sanitized, JSON-serializable view (no credential or reset fields)."""
        return {
            "id": str(self._id),
            "email": self.email,
            "mobile": self._mobile,
            "name": self._name,
            "avatarUrl": self._avatar_url,
            "googleId": self.google_id,
            "githubId": self.github_id,
            "facebookId": self.facebook_id,
            "isActive": self._is_active,
            "emailVerified": self._email_verified,
            "lastLoginAt": _isoformat(self._last_login_at),
            "createdAt": _isoformat(self._created_at),
        }

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email, None],
        name: str,
        password_hash: str | None = None,
        mobile: str | None = None,
    ) -> "User":
        """Create a local account, pending activation."""
        if email is None and _normalize_mobile(mobile) is None:
            raise MissingIdentifierError
        return cls(
            email=email,
            mobile=mobile,
            name=name,
            password_hash=password_hash,
            is_active=False,
        )

    @classmethod
    def create_from_provider(
        cls,
        provider: AuthProvider,
        external_id: str,
        email: Union[str, Email, None],
        name: str | None,
        avatar_url: str | None,
    ) -> "User":
        """Create an account from an OAuth profile. It has no local password."""
        return cls(
            email=email,
            name=name or DEFAULT_DISPLAY_NAME,
            password_hash=None,
            provider_ids={provider: external_id},
            avatar_url=avatar_url,
            is_active=True,
            email_verified=provider.is_trusted,
        )

    @classmethod
    def reconstitute(cls, **state: Any) -> "User":
        return cls(**state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self.email}, mobile={self._mobile})"


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
