"""OAuth provider clients (Google, GitHub, Facebook)."""

from reach_identity.infrastructure.oauth.base import OAuthClient
from reach_identity.infrastructure.oauth.facebook import FacebookOAuthClient
from reach_identity.infrastructure.oauth.factory import build_oauth_client
from reach_identity.infrastructure.oauth.github import GitHubOAuthClient
from reach_identity.infrastructure.oauth.google import GoogleOAuthClient

__all__ = [
    "FacebookOAuthClient",
    "GitHubOAuthClient",
    "GoogleOAuthClient",
    "OAuthClient",
    "build_oauth_client",
]
