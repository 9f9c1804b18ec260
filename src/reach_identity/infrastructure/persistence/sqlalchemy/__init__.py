"""SQLAlchemy persistence for the identity domain."""

from reach_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)
from reach_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from reach_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
