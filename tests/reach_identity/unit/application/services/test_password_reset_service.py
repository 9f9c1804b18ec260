"""Unit tests for PasswordResetService."""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from reach_auth import PasswordHashingService, ResetSecretService
from reach_identity.application.services import PasswordResetService
from reach_identity.application.services.password_reset_service import (
    GENERIC_RESET_MESSAGE,
)
from reach_identity.domain.shared.time import utc_now
from reach_identity.domain.user import User
from reach_identity.exceptions import InvalidBodyError, ResetTokenInvalidError
from reach_identity.infrastructure.email import EmailService

TEST_EMAIL = "test@example.com"
TEST_NEW_PASSWORD = "new_secure_password_123"
FRONTEND_URL = "https://example.com"


class TestPasswordResetServiceRequestReset:
    """Tests for request_reset."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.email_service = Mock(spec=EmailService)

        self.service = PasswordResetService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            reset_secret_service=ResetSecretService(),
            email_service=self.email_service,
            frontend_base_url=FRONTEND_URL,
        )

    async def test_request_reset_success(self):
        """Stores the digest and emails the plaintext secret."""
        user = User.create(TEST_EMAIL, "Tess", password_hash="hash")
        self.user_repo.find_by_email.return_value = user

        message = await self.service.request_reset(TEST_EMAIL)

        assert message == GENERIC_RESET_MESSAGE
        self.user_repo.save.assert_awaited_once_with(user)
        self.email_service.send_password_reset_email.assert_called_once()

        kwargs = self.email_service.send_password_reset_email.call_args.kwargs
        assert kwargs["to_email"] == TEST_EMAIL
        assert kwargs["name"] == "Tess"
        prefix = f"{FRONTEND_URL}/reset-password?token="
        assert kwargs["reset_link"].startswith(prefix)

        secret = kwargs["reset_link"][len(prefix) :]
        assert user.reset_token != secret
        assert user.has_live_reset_token(
            ResetSecretService().hash_secret_for_lookup(secret),
        )

    async def test_token_expires_after_one_hour(self):
        user = User.create(TEST_EMAIL, "Tess")
        self.user_repo.find_by_email.return_value = user

        await self.service.request_reset(TEST_EMAIL)

        remaining = user.reset_token_expiry - utc_now()
        assert timedelta(minutes=59) < remaining <= timedelta(hours=1)

    async def test_request_reset_unknown_email_silent(self):
        """Unknown email answers like a known one (no email enumeration)."""
        self.user_repo.find_by_email.return_value = None

        message = await self.service.request_reset("unknown@example.com")

        assert message == GENERIC_RESET_MESSAGE
        self.user_repo.save.assert_not_called()
        self.email_service.send_password_reset_email.assert_not_called()

    async def test_request_reset_malformed_email_silent(self):
        message = await self.service.request_reset("not-an-email")

        assert message == GENERIC_RESET_MESSAGE
        self.user_repo.find_by_email.assert_not_called()

    async def test_request_reset_empty_email(self):
        with pytest.raises(InvalidBodyError, match="Email is required"):
            await self.service.request_reset("  ")

    async def test_email_failure_does_not_raise(self):
        user = User.create(TEST_EMAIL, "Tess")
        self.user_repo.find_by_email.return_value = user
        self.email_service.send_password_reset_email.side_effect = OSError("down")

        message = await self.service.request_reset(TEST_EMAIL)

        assert message == GENERIC_RESET_MESSAGE
        self.user_repo.save.assert_awaited_once()


class TestPasswordResetServiceResetPassword:
    """Tests for reset_password."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "new-hash"
        self.reset_secrets = ResetSecretService()
        self.email_service = Mock(spec=EmailService)

        self.service = PasswordResetService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            reset_secret_service=self.reset_secrets,
            email_service=self.email_service,
            frontend_base_url=FRONTEND_URL,
        )

        self.issued = self.reset_secrets.issue_reset_secret()
        self.user = User.create(TEST_EMAIL, "Tess", password_hash="old-hash")
        self.user.start_password_reset(
            self.issued.secret_hash,
            utc_now() + timedelta(hours=1),
        )

    async def test_reset_password_success(self):
        self.user_repo.find_by_reset_token.return_value = self.user

        await self.service.reset_password(self.issued.secret, TEST_NEW_PASSWORD)

        lookup_hash = self.user_repo.find_by_reset_token.call_args.args[0]
        assert lookup_hash == self.issued.secret_hash
        self.password_service.hash.assert_called_once_with(TEST_NEW_PASSWORD)
        assert self.user.password_hash == "new-hash"
        assert self.user.reset_token is None
        self.user_repo.save.assert_awaited_once_with(self.user)

    async def test_unknown_token(self):
        self.user_repo.find_by_reset_token.return_value = None

        with pytest.raises(ResetTokenInvalidError):
            await self.service.reset_password("unknown", TEST_NEW_PASSWORD)

        self.user_repo.save.assert_not_called()

    async def test_expired_token(self):
        """An expired token fails even if the store hands the user back."""
        self.user.start_password_reset(
            self.issued.secret_hash,
            utc_now() - timedelta(seconds=1),
        )
        self.user_repo.find_by_reset_token.return_value = self.user

        with pytest.raises(ResetTokenInvalidError):
            await self.service.reset_password(self.issued.secret, TEST_NEW_PASSWORD)

        assert self.user.password_hash == "old-hash"

    async def test_token_cannot_be_reused(self):
        self.user_repo.find_by_reset_token.return_value = self.user
        await self.service.reset_password(self.issued.secret, TEST_NEW_PASSWORD)

        with pytest.raises(ResetTokenInvalidError):
            await self.service.reset_password(self.issued.secret, "another-one")

    @pytest.mark.parametrize(
        ("token", "password"),
        [(None, TEST_NEW_PASSWORD), ("token", None), ("", "")],
    )
    async def test_missing_fields(self, token, password):
        with pytest.raises(InvalidBodyError, match="Token & new password required"):
            await self.service.reset_password(token, password)
