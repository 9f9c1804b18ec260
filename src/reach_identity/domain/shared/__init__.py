"""Shared domain building blocks (errors, time)."""

from reach_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from reach_identity.domain.shared.time import ensure_tz_aware, utc_after, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ValidationError",
    "ensure_tz_aware",
    "utc_after",
    "utc_now",
]
