# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for the CRM directory."""

from reach_crm.infrastructure.persistence.sqlalchemy.models.contact_model import (
    ContactModel,
)

__all__ = [
    "ContactModel",
]
