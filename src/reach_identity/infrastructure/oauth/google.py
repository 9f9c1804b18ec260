"""Google OAuth client."""

import httpx

from reach_identity.application.dtos import OAuthProfile
from reach_identity.domain.user import AuthProvider
from reach_identity.infrastructure.oauth.base import OAuthClient


class GoogleOAuthClient(OAuthClient):
    provider = AuthProvider.GOOGLE
    authorize_endpoint = "https://accounts.google.com/o/oauth2/v2/auth"
    token_endpoint = "https://oauth2.googleapis.com/token"  # noqa: S105
    userinfo_endpoint = "https://openidconnect.googleapis.com/v1/userinfo"
    scope = "openid email profile"

    async def _fetch_profile(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> OAuthProfile:
        response = await client.get(
            self.userinfo_endpoint,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
        data = response.json()

        return OAuthProfile(
            provider=self.provider,
            external_id=str(data["sub"]),
            email=data.get("email"),
            display_name=data.get("name"),
            avatar_url=data.get("picture"),
        )
