"""OAuth login router (Google, GitHub, Facebook).

``GET /auth/{provider}`` redirects to the provider's consent page with a
signed ``state``; ``GET /auth/{provider}/callback`` checks the state,
exchanges the code and logs the resolved user in.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from reach_auth import InvalidTokenError
from reach_crm.presentation.api.dependencies import (
    AuthService,
    DBSession,
    JWTServiceDep,
    OAuthTransport,
    SettingsDep,
)
from reach_crm.presentation.api.schemas.auth import AuthResponse, UserResponse
from reach_identity.domain.user import AuthProvider
from reach_identity.exceptions import OAuthExchangeError
from reach_identity.infrastructure.oauth import build_oauth_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{provider}",
    status_code=status.HTTP_302_FOUND,
    summary="Start OAuth login",
    responses={
        302: {"description": "Redirect to the provider's consent page"},
        500: {"description": "Provider not configured"},
    },
)
async def oauth_login(
    provider: AuthProvider,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    transport: OAuthTransport,
) -> RedirectResponse:
    client = build_oauth_client(provider, settings, transport)
    state = jwt_service.issue_state_token(provider.value)
    return RedirectResponse(
        client.authorization_url(state),
        status_code=status.HTTP_302_FOUND,
    )


@router.get(
    "/{provider}/callback",
    summary="OAuth callback",
    responses={
        200: {"description": "Login successful"},
        500: {"description": "Provider exchange failed"},
    },
)
async def oauth_callback(  # noqa: PLR0913
    provider: AuthProvider,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    transport: OAuthTransport,
    auth_service: AuthService,
    session: DBSession,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> AuthResponse:
    client = build_oauth_client(provider, settings, transport)

    if error:
        logger.info("%s login cancelled or refused: %s", provider.value, error)
        raise OAuthExchangeError(provider.value, f"provider returned {error}")

    try:
        jwt_service.verify_state_token(state or "", provider.value)
    except InvalidTokenError as e:
        logger.warning("Rejected %s callback state: %s", provider.value, e)
        raise OAuthExchangeError(provider.value, "invalid state") from e

    profile = await client.fetch_profile(code)

    try:
        token, user = await auth_service.social_login(profile)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return AuthResponse(
        token=token,
        user=UserResponse.from_public_dict(user.to_public_dict()),
    )
