"""FastAPI dependency injection for the Reach API.

Provides dependencies for:
- Database sessions (from the engine created by the app factory)
- Authentication (bearer session token, current user)
- Service instances
"""

import logging
from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from reach_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    ResetSecretService,
    TokenPayload,
)
from reach_config.settings import Settings
from reach_crm.application.services import DirectoryService
from reach_crm.infrastructure.persistence.sqlalchemy.repositories import (
    ContactRepositorySQLAlchemy,
)
from reach_crm.presentation.api.config import get_api_settings
from reach_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
)
from reach_identity.exceptions import UnauthorizedError
from reach_identity.infrastructure.email import EmailService
from reach_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the session maker the
    app factory stored on ``app.state``.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Infrastructure Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        session_secret=settings.jwt_secret_key.get_secret_value(),
        activation_secret=settings.activation_secret_key.get_secret_value(),
        session_expire_minutes=settings.jwt_expire_minutes,
        activation_expire_hours=settings.activation_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_email_service(settings: SettingsDep) -> EmailService:
    return EmailService(settings)


def get_oauth_transport() -> httpx.AsyncBaseTransport | None:
    """HTTP transport for OAuth provider calls (None means the network)."""
    return None


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
OAuthTransport = Annotated[
    httpx.AsyncBaseTransport | None,
    Depends(get_oauth_transport),
]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


async def get_authentication_service(  # noqa: PLR0913
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
    email_service: EmailServiceDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates signup, login, social login, password
    change and account activation.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
        email_service=email_service,
        frontend_base_url=settings.frontend_base_url,
    )


async def get_password_reset_service(
    session: DBSession,
    settings: SettingsDep,
    password_service: PasswordServiceDep,
    email_service: EmailServiceDep,
) -> PasswordResetService:
    return PasswordResetService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        reset_secret_service=ResetSecretService(),
        email_service=email_service,
        frontend_base_url=settings.frontend_base_url,
    )


async def get_directory_service(session: DBSession) -> DirectoryService:
    return DirectoryService(
        user_repository=UserRepositorySQLAlchemy(session),
        contact_repository=ContactRepositorySQLAlchemy(session),
    )


# Type aliases for injected services
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
ResetService = Annotated[PasswordResetService, Depends(get_password_reset_service)]
Directory = Annotated[DirectoryService, Depends(get_directory_service)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_payload(
    jwt_service: JWTServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenPayload:
    """
    FastAPI dependency to get the authenticated identity from the bearer token.

    The decoded payload carries the sanitized user, so no store round-trip
    is needed.

    Parameters
    ----------
    jwt_service
        JWT service for token verification
    credentials
        Bearer token from Authorization header

    Returns
    -------
    The verified session token payload

    Raises
    ------
    UnauthorizedError
        If the token is missing, invalid, expired, or not a session token
    """
    if credentials is None:
        raise UnauthorizedError

    try:
        payload = jwt_service.verify_session_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Invalid bearer token: %s", e)
        raise UnauthorizedError("Invalid or expired token") from e

    return payload


CurrentPayload = Annotated[TokenPayload, Depends(get_current_payload)]

