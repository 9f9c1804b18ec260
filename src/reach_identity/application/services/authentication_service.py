"""Authentication service for signup, login and account activation."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from uuid import UUID

from reach_auth import InvalidTokenError, JWTService, PasswordHashingService
from reach_identity.application.dtos import OAuthProfile
from reach_identity.application.services.identity_resolver import IdentityResolver
from reach_identity.domain.shared.time import utc_now
from reach_identity.domain.user import (
    DuplicateIdentityError,
    Email,
    InvalidEmailError,
    User,
    UserNotFoundError,
)
from reach_identity.exceptions import (
    AccountDisabledError,
    ActivationTokenInvalidError,
    InvalidBodyError,
    InvalidCredentialsError,
    SocialLoginNoPasswordError,
    UnauthorizedError,
)

if TYPE_CHECKING:
    from reach_identity.domain.user import UserRepository
    from reach_identity.infrastructure.email import EmailService

logger = logging.getLogger(__name__)

ALREADY_ACTIVATED_MESSAGE = "Already activated"
ACTIVATED_MESSAGE = "Account activated successfully"
RESEND_ALREADY_ACTIVE_MESSAGE = "User already activated"
RESEND_SENT_MESSAGE = "Activation email sent"


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates reach_auth infrastructure (password hashing, JWT tokens)
    with the reach_identity User domain to provide:
    - Signup with activation email
    - Login with email or mobile and password
    - Social login through the IdentityResolver
    - Password change
    - Account activation and activation email resend

    bcrypt and SMTP are blocking and run in worker threads.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        email_service: EmailService,
        frontend_base_url: str,
        identity_resolver: IdentityResolver | None = None,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._email_service = email_service
        self._frontend_base_url = frontend_base_url.rstrip("/")
        self._identity_resolver = identity_resolver or IdentityResolver(
            user_repository,
        )

    def _issue_session_token(self, user: User) -> str:
        return self._jwt_service.issue_session_token(user.to_public_dict())

    async def _send_activation_email(self, user: User) -> None:
        if user.email is None:
            logger.warning("User %s has no email, activation email skipped", user.id)
            return

        token = self._jwt_service.issue_activation_token(user.id)
        activation_link = f"{self._frontend_base_url}/activate/{token}"
        try:
            await asyncio.to_thread(
                self._email_service.send_activation_email,
                to_email=user.email,
                name=user.name,
                activation_link=activation_link,
            )
            logger.info("Activation email sent to %s", user.email)
        except Exception as e:
            # Don't raise - the account stays pending until activated
            logger.error("Failed to send activation email to %s: %s", user.email, e)

    async def signup(
        self,
        email: str | None,
        password: str | None,
        name: str | None,
        mobile: str | None = None,
    ) -> User:
        """
        Register a local account pending activation.

        Parameters
        ----------
        email
            Email address (required)
        password
            Plaintext password (required)
        name
            Display name (required)
        mobile
            Optional mobile number, unique when given

        Returns
        -------
        The newly created, inactive user

        Raises
        ------
        InvalidBodyError
            If a required field is missing or the email is malformed
        DuplicateIdentityError
            If the email or mobile number is already registered
        """
        if not email or not password or not name:
            raise InvalidBodyError
        try:
            email_value = Email(email)
        except InvalidEmailError as e:
            raise InvalidBodyError("Invalid email address") from e

        if await self._user_repo.find_by_email(email_value) is not None:
            raise DuplicateIdentityError(email_value.value)
        if mobile and await self._user_repo.find_by_mobile(mobile) is not None:
            raise DuplicateIdentityError(mobile)

        password_hash = await asyncio.to_thread(self._password_service.hash, password)
        user = User.create(
            email=email_value,
            name=name,
            password_hash=password_hash,
            mobile=mobile,
        )
        # Unique constraints decide concurrent signups
        await self._user_repo.save(user)

        logger.info("User registered: %s", user.email)
        await self._send_activation_email(user)
        return user

    async def login(
        self,
        password: str | None,
        email: str | None = None,
        mobile: str | None = None,
    ) -> tuple[str, User]:
        """
        Authenticate with a local credential.

        Email is used when both identifiers are given. Unknown identifiers
        and wrong passwords raise the same InvalidCredentialsError.

        Returns
        -------
        Tuple of (session token, user)
        """
        if not password or not (email or mobile):
            raise InvalidBodyError

        user = await self._find_by_identifier(email, mobile)
        if user is None:
            raise InvalidCredentialsError

        if not user.is_active:
            raise AccountDisabledError

        is_valid = await asyncio.to_thread(
            self._password_service.verify,
            password,
            user.password_hash,
        )
        if not is_valid:
            raise InvalidCredentialsError

        if user.password_hash and self._password_service.needs_rehash(
            user.password_hash,
        ):
            new_hash = await asyncio.to_thread(self._password_service.hash, password)
            user.change_password_hash(new_hash)
            logger.debug("Rehashed password for user: %s", user.id)

        user.record_login(utc_now())
        await self._user_repo.save(user)

        logger.info("User logged in: %s", user.id)
        return self._issue_session_token(user), user

    async def _find_by_identifier(
        self,
        email: str | None,
        mobile: str | None,
    ) -> User | None:
        if email:
            try:
                return await self._user_repo.find_by_email(email)
            except InvalidEmailError:
                return None
        return await self._user_repo.find_by_mobile(mobile or "")

    async def social_login(self, profile: OAuthProfile) -> tuple[str, User]:
        """Resolve an OAuth profile to a user and issue a session token."""
        user = await self._identity_resolver.resolve(profile)
        logger.info("Social login via %s: %s", profile.provider.value, user.id)
        return self._issue_session_token(user), user

    async def change_password(
        self,
        user_id: UUID,
        current_password: str | None,
        new_password: str | None,
    ) -> None:
        if not current_password or not new_password:
            raise InvalidBodyError("Both passwords are required")

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if not user.has_password:
            raise SocialLoginNoPasswordError

        is_valid = await asyncio.to_thread(
            self._password_service.verify,
            current_password,
            user.password_hash,
        )
        if not is_valid:
            msg = "Current password incorrect"
            raise UnauthorizedError(msg)

        new_hash = await asyncio.to_thread(self._password_service.hash, new_password)
        user.change_password_hash(new_hash)
        await self._user_repo.save(user)

        logger.info("Password changed for user: %s", user_id)

    async def activate_account(self, token: str) -> str:
        """
        Consume an activation token.

        Any unexpired token for the user activates the account, and a
        repeated call reports success without changing anything.

        Returns
        -------
        Message describing the outcome
        """
        try:
            user_id = self._jwt_service.verify_activation_token(token)
        except InvalidTokenError as e:
            logger.debug("Activation token rejected: %s", e)
            raise ActivationTokenInvalidError from e

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if user.is_active:
            return ALREADY_ACTIVATED_MESSAGE

        user.activate()
        await self._user_repo.save(user)

        logger.info("User activated: %s", user.id)
        return ACTIVATED_MESSAGE

    async def resend_activation_email(self, email: str | None) -> str:
        """Reissue an activation email. Earlier tokens remain valid."""
        if not email:
            raise InvalidBodyError("Email is required")

        try:
            user = await self._user_repo.find_by_email(email)
        except InvalidEmailError as e:
            raise InvalidBodyError("Invalid email address") from e
        if user is None:
            raise UserNotFoundError

        if user.is_active:
            return RESEND_ALREADY_ACTIVE_MESSAGE

        await self._send_activation_email(user)
        return RESEND_SENT_MESSAGE
