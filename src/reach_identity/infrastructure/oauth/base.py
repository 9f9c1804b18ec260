"""Base OAuth 2.0 authorization-code client."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from reach_identity.application.dtos import OAuthProfile
from reach_identity.domain.user import AuthProvider
from reach_identity.exceptions import OAuthExchangeError

logger = logging.getLogger(__name__)


class OAuthClient(ABC):
    """Authorization-code flow against one provider.

    Subclasses set the endpoint URLs and map the provider's profile
    response to an OAuthProfile. A custom ``transport`` replaces the
    network layer (httpx.MockTransport in tests).
    """

    provider: AuthProvider
    authorize_endpoint: str
    token_endpoint: str
    scope: str

    def __init__(  # noqa: PLR0913
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._timeout = timeout
        self._transport = transport

    @property
    def redirect_uri(self) -> str:
        return self._redirect_uri

    def authorization_url(self, state: str) -> str:
        """URL of the provider's consent page for this client."""
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": self.scope,
            "state": state,
            **self._extra_authorize_params(),
        }
        return str(httpx.URL(self.authorize_endpoint, params=params))

    def _extra_authorize_params(self) -> dict[str, str]:
        return {}

    async def fetch_profile(self, code: str | None) -> OAuthProfile:
        """
        Exchange an authorization code and fetch the user's profile.

        Parameters
        ----------
        code
            The ``code`` query parameter of the provider's callback

        Returns
        -------
        The provider profile

        Raises
        ------
        OAuthExchangeError
            If the code is missing, the provider rejects it, or a
            response cannot be parsed
        """
        provider = self.provider.value
        if not code:
            raise OAuthExchangeError(provider, "missing authorization code")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                access_token = await self._exchange_code(client, code)
                return await self._fetch_profile(client, access_token)
        except httpx.TimeoutException as e:
            logger.warning("%s OAuth request timed out: %s", provider, e)
            raise OAuthExchangeError(provider, "request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                "%s OAuth request failed with status %s",
                provider,
                e.response.status_code,
            )
            raise OAuthExchangeError(
                provider,
                f"HTTP {e.response.status_code}",
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s OAuth connection error: %s", provider, e)
            raise OAuthExchangeError(provider, "connection error") from e
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("%s OAuth returned an unexpected payload: %s", provider, e)
            raise OAuthExchangeError(provider, "unexpected response") from e

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        response = await client.post(
            self.token_endpoint,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "code": code,
                "redirect_uri": self._redirect_uri,
                "grant_type": "authorization_code",
            },
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        return self._access_token_from(response.json())

    def _access_token_from(self, payload: dict[str, Any]) -> str:
        access_token = payload.get("access_token")
        if not access_token:
            reason = payload.get("error_description") or payload.get(
                "error",
                "no access token",
            )
            raise OAuthExchangeError(self.provider.value, str(reason))
        return access_token

    @abstractmethod
    async def _fetch_profile(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> OAuthProfile:
        """Fetch and map the provider's profile for ``access_token``."""
