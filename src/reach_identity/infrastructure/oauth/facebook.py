"""Facebook OAuth client."""

import httpx

from reach_identity.application.dtos import OAuthProfile
from reach_identity.domain.user import AuthProvider
from reach_identity.infrastructure.oauth.base import OAuthClient

GRAPH_API_VERSION = "v19.0"


class FacebookOAuthClient(OAuthClient):
    provider = AuthProvider.FACEBOOK
    authorize_endpoint = f"https://www.facebook.com/{GRAPH_API_VERSION}/dialog/oauth"
    token_endpoint = (  # noqa: S105
        f"https://graph.facebook.com/{GRAPH_API_VERSION}/oauth/access_token"
    )
    profile_endpoint = f"https://graph.facebook.com/{GRAPH_API_VERSION}/me"
    profile_fields = "id,name,email,picture.type(large)"
    scope = "email public_profile"

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        # The Graph API token endpoint takes a GET with query parameters
        response = await client.get(
            self.token_endpoint,
            params={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "code": code,
                "redirect_uri": self._redirect_uri,
            },
        )
        response.raise_for_status()
        return self._access_token_from(response.json())

    async def _fetch_profile(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> OAuthProfile:
        response = await client.get(
            self.profile_endpoint,
            params={"fields": self.profile_fields, "access_token": access_token},
        )
        response.raise_for_status()
        data = response.json()

        picture = (data.get("picture") or {}).get("data") or {}
        return OAuthProfile(
            provider=self.provider,
            external_id=str(data["id"]),
            email=data.get("email"),
            display_name=data.get("name"),
            avatar_url=picture.get("url"),
        )
