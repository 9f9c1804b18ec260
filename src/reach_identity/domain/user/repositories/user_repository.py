"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from reach_identity.domain.user.aggregates.user import User
from reach_identity.domain.user.value_objects import AuthProvider, Email


class UserRepository(ABC):
    """Repository interface for User aggregates (the credential store).

    Email and mobile uniqueness is enforced by the store itself; ``save``
    raises DuplicateIdentityError when a write would violate it.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_by_mobile(self, mobile: str) -> Optional[User]:
        """Find a user by their mobile number."""

    @abstractmethod
    async def find_by_provider_id(
        self,
        provider: AuthProvider,
        external_id: str,
    ) -> Optional[User]:
        """Find a user linked to the given OAuth provider account."""

    @abstractmethod
    async def find_by_reset_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Optional[User]:
        """Find the user holding ``token_hash`` with an expiry after ``now``."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Create or update a user."""

    @abstractmethod
    async def search(
        self,
        term: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[User]:
        """List users whose name or email contains ``term`` (case-insensitive)."""

    @abstractmethod
    async def count(self, term: str | None = None) -> int:
        """Count users matching ``term`` (all users when empty)."""
