"""SQLAlchemy persistence for the CRM directory."""

from reach_crm.infrastructure.persistence.sqlalchemy.models import ContactModel
from reach_crm.infrastructure.persistence.sqlalchemy.repositories import (
    ContactRepositorySQLAlchemy,
)

__all__ = [
    "ContactModel",
    "ContactRepositorySQLAlchemy",
]
