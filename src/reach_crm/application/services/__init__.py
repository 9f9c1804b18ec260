"""CRM application services."""

from reach_crm.application.services.directory_service import (
    DirectoryService,
    UserPage,
)

__all__ = ["DirectoryService", "UserPage"]
