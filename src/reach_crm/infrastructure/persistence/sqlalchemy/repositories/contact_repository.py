"""SQLAlchemy implementation of ContactRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reach_crm.domain.contact import Contact, ContactRepository
from reach_crm.infrastructure.persistence.sqlalchemy.models import ContactModel
from reach_identity.domain.shared.time import ensure_tz_aware

logger = logging.getLogger(__name__)


class ContactRepositorySQLAlchemy(ContactRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self) -> list[Contact]:
        stmt = select(ContactModel).order_by(ContactModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_user_id(self, user_id: UUID) -> Contact | None:
        stmt = select(ContactModel).where(ContactModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, contact: Contact) -> None:
        model = await self._session.get(ContactModel, contact.id)
        if model is None:
            self._session.add(self._map_to_model(contact))
            logger.info("Created contact %s for user %s", contact.id, contact.user_id)
        else:
            model.name = contact.name
            model.email = contact.email
            model.phone = contact.phone
            model.company = contact.company
            model.job_title = contact.job_title
            model.notes = contact.notes
            model.updated_at = contact.updated_at
        await self._session.flush()

    def _map_to_domain(self, model: ContactModel) -> Contact:
        return Contact(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            company=model.company,
            job_title=model.job_title,
            notes=model.notes,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, contact: Contact) -> ContactModel:
        return ContactModel(
            id=contact.id,
            user_id=contact.user_id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            company=contact.company,
            job_title=contact.job_title,
            notes=contact.notes,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )
