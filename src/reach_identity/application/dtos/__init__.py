"""Application DTOs."""

from reach_identity.application.dtos.oauth_profile import OAuthProfile

__all__ = ["OAuthProfile"]
