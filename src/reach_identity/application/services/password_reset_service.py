import asyncio
import logging
from datetime import timedelta

from reach_auth import PasswordHashingService, ResetSecretService
from reach_identity.domain.shared.time import utc_after, utc_now
from reach_identity.domain.user import Email, InvalidEmailError, UserRepository
from reach_identity.exceptions import InvalidBodyError, ResetTokenInvalidError
from reach_identity.infrastructure.email import EmailService

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If the email exists, a reset link has been sent."


class PasswordResetService:
    """Service for handling password reset requests and token validation.

    Only the sha256 digest of a reset secret is stored on the user row. A new
    request overwrites the previous digest, and a successful reset clears it.
    """

    TOKEN_EXPIRY_HOURS = 1

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        reset_secret_service: ResetSecretService,
        email_service: EmailService,
        frontend_base_url: str,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._reset_secrets = reset_secret_service
        self._email_service = email_service
        self._frontend_base_url = frontend_base_url.rstrip("/")

    async def request_reset(self, email: str | None) -> str:
        """Start a password reset and return the generic response message.

        Unknown and malformed addresses get the same message as known ones.
        """
        if not email or not email.strip():
            raise InvalidBodyError("Email is required")

        try:
            email_value = Email(email)
        except InvalidEmailError:
            logger.debug("Password reset requested for malformed email")
            return GENERIC_RESET_MESSAGE

        user = await self._user_repo.find_by_email(email_value)
        if not user:
            # Silent fail to prevent email enumeration
            logger.debug("Password reset requested for unknown email: %s", email)
            return GENERIC_RESET_MESSAGE

        reset_secret = self._reset_secrets.issue_reset_secret()
        expires_at = utc_after(timedelta(hours=self.TOKEN_EXPIRY_HOURS))
        user.start_password_reset(reset_secret.secret_hash, expires_at)
        await self._user_repo.save(user)

        reset_link = (
            f"{self._frontend_base_url}/reset-password?token={reset_secret.secret}"
        )
        try:
            await asyncio.to_thread(
                self._email_service.send_password_reset_email,
                to_email=email_value.value,
                name=user.name,
                reset_link=reset_link,
            )
            logger.info("Password reset email sent to %s", email_value.value)
        except Exception as e:
            # Don't raise - the reset token is already stored
            logger.error("Failed to send password reset email: %s", e)

        return GENERIC_RESET_MESSAGE

    async def reset_password(
        self,
        token: str | None,
        new_password: str | None,
    ) -> None:
        if not token or not new_password:
            raise InvalidBodyError("Token & new password required")

        token_hash = self._reset_secrets.hash_secret_for_lookup(token)
        user = await self._user_repo.find_by_reset_token(token_hash, utc_now())

        # An expired digest never matches, whatever the store returned
        if not user or not user.has_live_reset_token(token_hash):
            raise ResetTokenInvalidError

        new_hash = await asyncio.to_thread(self._password_service.hash, new_password)
        user.complete_password_reset(new_hash)
        await self._user_repo.save(user)

        logger.info("Password reset completed for user: %s", user.id)
