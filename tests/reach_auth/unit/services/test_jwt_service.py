"""Unit tests for JWTService."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from reach_auth.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenInvalidError,
)
from reach_auth.services import JWTService

SESSION_SECRET = "session-secret-key-12345"
ACTIVATION_SECRET = "activation-secret-key-67890"


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secrets(self):
        """Service initializes with both secrets."""
        service = JWTService(SESSION_SECRET, ACTIVATION_SECRET)
        assert service.session_expires_in == 60 * 60

    def test_empty_session_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService("", ACTIVATION_SECRET)

    def test_empty_activation_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(SESSION_SECRET, "")

    def test_custom_session_expiry(self):
        service = JWTService(
            SESSION_SECRET,
            ACTIVATION_SECRET,
            session_expire_minutes=5,
        )
        assert service.session_expires_in == 300


class TestSessionTokens:
    """Tests for session token issuance and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(SESSION_SECRET, ACTIVATION_SECRET)
        self.user_id = uuid4()
        self.user = {
            "id": str(self.user_id),
            "email": "a@b.com",
            "name": "A",
            "isActive": True,
        }

    def test_roundtrip_returns_user_id_and_record(self):
        """A freshly issued token verifies to the embedded user."""
        token = self.service.issue_session_token(self.user)

        payload = self.service.verify_session_token(token)

        assert payload.user_id == self.user_id
        assert payload.is_session_token()
        assert payload.user["email"] == "a@b.com"
        assert payload.user["name"] == "A"
        assert payload.email == "a@b.com"

    def test_subject_claim_is_user_id(self):
        token = self.service.issue_session_token(self.user)

        claims = jwt.decode(token, SESSION_SECRET, algorithms=["HS256"])

        assert claims["sub"] == str(self.user_id)
        assert claims["type"] == "session"
        assert claims["exp"] - claims["iat"] == 3600

    def test_reserved_claims_in_record_are_ignored(self):
        """A record carrying 'exp' or 'type' cannot override the codec's claims."""
        record = {**self.user, "exp": 1, "type": "activation"}

        token = self.service.issue_session_token(record)
        payload = self.service.verify_session_token(token)

        assert payload.token_type == "session"
        assert "exp" not in payload.user

    def test_record_without_id_raises(self):
        with pytest.raises(ValueError, match="user id"):
            self.service.issue_session_token({"email": "a@b.com"})

    def test_expired_token_raises(self):
        token = self.service.issue_session_token(
            self.user,
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            self.service.verify_session_token(token)

    def test_tampered_token_raises(self):
        token = self.service.issue_session_token(self.user)
        header, body, signature = token.split(".")
        tampered = f"{header}.{body}.{signature[::-1]}"

        with pytest.raises(TokenInvalidError):
            self.service.verify_session_token(tampered)

    def test_token_signed_with_other_secret_raises(self):
        other = JWTService("different-secret-abcdef", ACTIVATION_SECRET)
        token = other.issue_session_token(self.user)

        with pytest.raises(InvalidTokenError):
            self.service.verify_session_token(token)

    def test_garbage_raises(self):
        with pytest.raises(TokenInvalidError):
            self.service.verify_session_token("not.a.token")

    def test_activation_token_is_not_a_session_token(self):
        token = self.service.issue_activation_token(self.user_id)

        with pytest.raises(InvalidTokenError):
            self.service.verify_session_token(token)


class TestActivationTokens:
    """Tests for account activation tokens."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(SESSION_SECRET, ACTIVATION_SECRET)
        self.user_id = uuid4()

    def test_roundtrip_returns_user_id(self):
        token = self.service.issue_activation_token(self.user_id)

        assert self.service.verify_activation_token(token) == self.user_id

    def test_signed_with_activation_secret(self):
        token = self.service.issue_activation_token(self.user_id)

        claims = jwt.decode(token, ACTIVATION_SECRET, algorithms=["HS256"])

        assert claims["id"] == str(self.user_id)
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_expired_token_raises(self):
        token = self.service.issue_activation_token(
            self.user_id,
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            self.service.verify_activation_token(token)

    def test_session_token_is_not_an_activation_token(self):
        token = self.service.issue_session_token({"id": str(self.user_id)})

        with pytest.raises(InvalidTokenError):
            self.service.verify_activation_token(token)

    def test_malformed_id_raises(self):
        token = jwt.encode(
            {"id": "not-a-uuid", "type": "activation", "exp": 4102444800},
            ACTIVATION_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError, match="Malformed"):
            self.service.verify_activation_token(token)


class TestStateTokens:
    """Tests for OAuth state values."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(SESSION_SECRET, ACTIVATION_SECRET)

    def test_state_verifies_for_its_provider(self):
        state = self.service.issue_state_token("github")

        self.service.verify_state_token(state, "github")

    def test_state_rejected_for_other_provider(self):
        state = self.service.issue_state_token("github")

        with pytest.raises(TokenInvalidError, match="another provider"):
            self.service.verify_state_token(state, "google")

    def test_empty_state_rejected(self):
        with pytest.raises(InvalidTokenError):
            self.service.verify_state_token("", "google")
