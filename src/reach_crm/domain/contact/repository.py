"""Contact repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from reach_crm.domain.contact.contact import Contact


class ContactRepository(ABC):
    @abstractmethod
    async def find_all(self) -> list[Contact]:
        """Return every contact card."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> Optional[Contact]:
        """Find the contact card belonging to a user."""

    @abstractmethod
    async def save(self, contact: Contact) -> None:
        """Create or update a contact card."""
