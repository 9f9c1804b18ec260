"""GitHub OAuth client."""

import logging

import httpx

from reach_identity.application.dtos import OAuthProfile
from reach_identity.domain.user import AuthProvider
from reach_identity.infrastructure.oauth.base import OAuthClient

logger = logging.getLogger(__name__)


class GitHubOAuthClient(OAuthClient):
    """GitHub client.

    ``/user`` only reports the public email; when that is empty the
    primary verified address from ``/user/emails`` is used instead.
    """

    provider = AuthProvider.GITHUB
    authorize_endpoint = "https://github.com/login/oauth/authorize"
    token_endpoint = "https://github.com/login/oauth/access_token"  # noqa: S105
    api_base = "https://api.github.com"
    scope = "read:user user:email"

    def _headers(self, access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }

    async def _fetch_profile(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> OAuthProfile:
        response = await client.get(
            f"{self.api_base}/user",
            headers=self._headers(access_token),
        )
        response.raise_for_status()
        data = response.json()

        email = data.get("email") or await self._primary_email(client, access_token)
        return OAuthProfile(
            provider=self.provider,
            external_id=str(data["id"]),
            email=email,
            display_name=data.get("name") or data.get("login"),
            avatar_url=data.get("avatar_url"),
        )

    async def _primary_email(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> str | None:
        response = await client.get(
            f"{self.api_base}/user/emails",
            headers=self._headers(access_token),
        )
        if response.status_code != httpx.codes.OK:
            logger.debug("GitHub email list unavailable: %s", response.status_code)
            return None

        entries = response.json()
        if not isinstance(entries, list):
            logger.debug("Unexpected GitHub email list payload")
            return None
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None
