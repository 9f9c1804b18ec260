"""Read-only lookups over users and contact cards."""

from dataclasses import dataclass
from uuid import UUID

from reach_crm.domain.contact import Contact, ContactNotFoundError, ContactRepository
from reach_identity.domain.user import User, UserNotFoundError, UserRepository

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class UserPage:
    users: list[User]
    total: int
    page: int
    limit: int


class DirectoryService:
    """User and contact directory for authenticated callers."""

    def __init__(
        self,
        user_repository: UserRepository,
        contact_repository: ContactRepository,
    ):
        self._user_repo = user_repository
        self._contact_repo = contact_repository

    async def list_users(
        self,
        search: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> UserPage:
        """
        Search users by name or email.

        Parameters
        ----------
        search
            Case-insensitive substring; empty lists everyone
        page
            1-based page number; 0 means the first page and negative values
            are clamped to 1
        limit
            Page size; 0 means the default and negative values are clamped
            to 1

        Returns
        -------
        The users on the page, the total match count and the page and
        limit actually applied
        """
        page = max(1, page or 1)
        limit = max(1, limit or DEFAULT_PAGE_SIZE)
        term = (search or "").strip() or None

        users = await self._user_repo.search(
            term=term,
            offset=(page - 1) * limit,
            limit=limit,
        )
        total = await self._user_repo.count(term=term)
        return UserPage(users=users, total=total, page=page, limit=limit)

    async def get_user(self, user_id: UUID) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def list_contacts(self) -> list[Contact]:
        return await self._contact_repo.find_all()

    async def get_contact(self, user_id: UUID) -> Contact:
        contact = await self._contact_repo.find_by_user_id(user_id)
        if contact is None:
            raise ContactNotFoundError(str(user_id))
        return contact
