# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for the CRM directory."""

from reach_crm.infrastructure.persistence.sqlalchemy.repositories.contact_repository import (
    ContactRepositorySQLAlchemy,
)

__all__ = [
    "ContactRepositorySQLAlchemy",
]
