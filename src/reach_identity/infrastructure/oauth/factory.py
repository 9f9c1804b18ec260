"""Build OAuth clients from application settings."""

import httpx

from reach_config.settings import Settings
from reach_identity.domain.user import AuthProvider
from reach_identity.exceptions import OAuthProviderNotConfiguredError
from reach_identity.infrastructure.oauth.base import OAuthClient
from reach_identity.infrastructure.oauth.facebook import FacebookOAuthClient
from reach_identity.infrastructure.oauth.github import GitHubOAuthClient
from reach_identity.infrastructure.oauth.google import GoogleOAuthClient

_CLIENT_CLASSES: dict[AuthProvider, type[OAuthClient]] = {
    AuthProvider.GOOGLE: GoogleOAuthClient,
    AuthProvider.GITHUB: GitHubOAuthClient,
    AuthProvider.FACEBOOK: FacebookOAuthClient,
}


def build_oauth_client(
    provider: AuthProvider,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> OAuthClient:
    """
    Create the client for ``provider`` from its configured credentials.

    Raises
    ------
    OAuthProviderNotConfiguredError
        If the provider's client id or client secret is not set
    """
    provider = AuthProvider(provider)
    client_id = getattr(settings, f"{provider.value}_client_id")
    client_secret = getattr(settings, f"{provider.value}_client_secret")

    if not client_id or client_secret is None or not client_secret.get_secret_value():
        raise OAuthProviderNotConfiguredError(provider.value)

    return _CLIENT_CLASSES[provider](
        client_id=client_id,
        client_secret=client_secret.get_secret_value(),
        redirect_uri=settings.oauth_callback_url(provider.value),
        timeout=settings.oauth_http_timeout,
        transport=transport,
    )
