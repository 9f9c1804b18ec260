"""API routers."""

from reach_crm.presentation.api.routers.auth import router as auth_router
from reach_crm.presentation.api.routers.contacts import router as contacts_router
from reach_crm.presentation.api.routers.oauth import router as oauth_router
from reach_crm.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "contacts_router",
    "oauth_router",
    "users_router",
]
