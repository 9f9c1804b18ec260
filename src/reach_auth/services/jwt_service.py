"""JWT token service.

Provides creation and verification of the three signed, time-bounded
tokens used by the application:

- session tokens (signed with the session secret, carry the sanitized user)
- account activation tokens (signed with a dedicated activation secret)
- OAuth ``state`` tokens (signed with the session secret, short-lived)
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt

from reach_auth.exceptions import TokenExpiredError, TokenInvalidError
from reach_auth.schemas import (
    ACTIVATION_TOKEN_TYPE,
    SESSION_TOKEN_TYPE,
    STATE_TOKEN_TYPE,
    TokenPayload,
)

# Claims owned by the codec; never copied from the embedded user record
_RESERVED_CLAIMS = frozenset({"sub", "type", "iat", "exp"})


class JWTService:
    """Service for JWT token creation and verification.

    Session and activation tokens use separate secrets so that one kind can
    never be replayed as the other, and every token carries a ``type`` claim
    that is checked on verification.

    Examples
    --------
    >>> service = JWTService(session_secret="s3cret", activation_secret="other")
    >>> token = service.issue_session_token({"id": str(user_id), "email": "a@b.com"})
    >>> payload = service.verify_session_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_SESSION_EXPIRE_MINUTES = 60
    DEFAULT_ACTIVATION_EXPIRE_HOURS = 24
    STATE_EXPIRE_MINUTES = 10
    ALGORITHM = "HS256"

    def __init__(
        self,
        session_secret: str,
        activation_secret: str,
        session_expire_minutes: int = DEFAULT_SESSION_EXPIRE_MINUTES,
        activation_expire_hours: int = DEFAULT_ACTIVATION_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        session_secret
            Secret key for signing session and OAuth state tokens.
        activation_secret
            Secret key for signing account activation tokens.
        session_expire_minutes
            Minutes until a session token expires (default 60)
        activation_expire_hours
            Hours until an activation token expires (default 24)
        """
        if not session_secret:
            msg = "JWT session secret cannot be empty"
            raise ValueError(msg)
        if not activation_secret:
            msg = "JWT activation secret cannot be empty"
            raise ValueError(msg)

        self._session_secret = session_secret
        self._activation_secret = activation_secret
        self._session_expire = timedelta(minutes=session_expire_minutes)
        self._activation_expire = timedelta(hours=activation_expire_hours)

    @property
    def session_expires_in(self) -> int:
        """Session token lifetime in seconds."""
        return int(self._session_expire.total_seconds())

    def issue_session_token(
        self,
        sanitized_user: dict[str, Any],
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign the sanitized user record into a session token.

        Parameters
        ----------
        sanitized_user
            JSON-serializable user record without credential fields. Must
            contain an ``id``.
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        if "id" not in sanitized_user:
            msg = "Session token payload requires a user id"
            raise ValueError(msg)

        claims = {
            key: value
            for key, value in sanitized_user.items()
            if key not in _RESERVED_CLAIMS
        }
        claims["sub"] = str(sanitized_user["id"])
        return self._encode(
            claims,
            token_type=SESSION_TOKEN_TYPE,
            secret=self._session_secret,
            expires_delta=expires_delta or self._session_expire,
        )

    def verify_session_token(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        Raises
        ------
        TokenExpiredError
            If the token's lifetime has ended
        TokenInvalidError
            If the token is malformed, forged or not a session token
        """
        payload = self._decode(token, self._session_secret, SESSION_TOKEN_TYPE)

        try:
            user_id = UUID(payload["sub"])
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (KeyError, ValueError, TypeError) as e:
            raise TokenInvalidError(f"Malformed token payload: {e}") from e

        user = {
            key: value for key, value in payload.items() if key not in _RESERVED_CLAIMS
        }
        return TokenPayload(
            user_id=user_id,
            exp=exp,
            token_type=SESSION_TOKEN_TYPE,
            user=user,
        )

    def issue_activation_token(
        self,
        user_id: UUID,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an account activation token for ``user_id``."""
        return self._encode(
            {"id": str(user_id)},
            token_type=ACTIVATION_TOKEN_TYPE,
            secret=self._activation_secret,
            expires_delta=expires_delta or self._activation_expire,
        )

    def verify_activation_token(self, token: str) -> UUID:
        """Verify an activation token and return the embedded user id.

        Raises
        ------
        TokenExpiredError
            If the token's lifetime has ended
        TokenInvalidError
            If the token is malformed, forged or not an activation token
        """
        payload = self._decode(token, self._activation_secret, ACTIVATION_TOKEN_TYPE)
        try:
            return UUID(payload["id"])
        except (KeyError, ValueError, TypeError) as e:
            raise TokenInvalidError(f"Malformed token payload: {e}") from e

    def issue_state_token(self, provider: str) -> str:
        """Create a short-lived OAuth ``state`` value bound to ``provider``."""
        return self._encode(
            {"provider": provider},
            token_type=STATE_TOKEN_TYPE,
            secret=self._session_secret,
            expires_delta=timedelta(minutes=self.STATE_EXPIRE_MINUTES),
        )

    def verify_state_token(self, token: str, provider: str) -> None:
        """Check an OAuth ``state`` value returned by ``provider``."""
        payload = self._decode(token, self._session_secret, STATE_TOKEN_TYPE)
        if payload.get("provider") != provider:
            msg = "OAuth state was issued for another provider"
            raise TokenInvalidError(msg)

    def _encode(
        self,
        claims: dict[str, Any],
        token_type: str,
        secret: str,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            **claims,
            "type": token_type,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, secret, algorithm=self.ALGORITHM)

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}") from e

        if payload.get("type") != expected_type:
            msg = f"Expected a {expected_type} token"
            raise TokenInvalidError(msg)
        return payload
