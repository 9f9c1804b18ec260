# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from reach_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "UserModel",
]
