"""API configuration adapter.

Bridges the centralized reach_config settings with the API layer. The
settings an app was created with live on ``app.state``.
"""

from fastapi import Request

from reach_config.settings import Settings


def get_api_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""
    return request.app.state.settings
