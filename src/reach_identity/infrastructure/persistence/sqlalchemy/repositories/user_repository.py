"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import datetime
from typing import Union
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reach_identity.domain.shared.time import ensure_tz_aware
from reach_identity.domain.user import (
    AuthProvider,
    DuplicateIdentityError,
    Email,
    User,
    UserRepository,
)
from reach_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)

_PROVIDER_COLUMNS = {
    AuthProvider.GOOGLE: UserModel.google_id,
    AuthProvider.GITHUB: UserModel.github_id,
    AuthProvider.FACEBOOK: UserModel.facebook_id,
}


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        return await self._find_one(select(UserModel).where(UserModel.id == user_id))

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value
        stmt = select(UserModel).where(UserModel.email == email_value)
        return await self._find_one(stmt)

    async def find_by_mobile(self, mobile: str) -> User | None:
        mobile_value = "".join(mobile.split())
        if not mobile_value:
            return None
        stmt = select(UserModel).where(UserModel.mobile == mobile_value)
        return await self._find_one(stmt)

    async def find_by_provider_id(
        self,
        provider: AuthProvider,
        external_id: str,
    ) -> User | None:
        column = _PROVIDER_COLUMNS[AuthProvider(provider)]
        return await self._find_one(select(UserModel).where(column == external_id))

    async def find_by_reset_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> User | None:
        stmt = select(UserModel).where(
            UserModel.reset_token == token_hash,
            UserModel.reset_token_expiry > now,
        )
        return await self._find_one(stmt)

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s (email: %s)", user.id, user.email)

            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise DuplicateIdentityError(user.email or user.mobile) from e
            raise

    async def search(
        self,
        term: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[User]:
        stmt = (
            self._apply_search(select(UserModel), term)
            .order_by(UserModel.created_at, UserModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def count(self, term: str | None = None) -> int:
        stmt = self._apply_search(select(func.count()).select_from(UserModel), term)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def _apply_search(stmt: Select, term: str | None) -> Select:
        if not term or not term.strip():
            return stmt
        pattern = f"%{term.strip()}%"
        return stmt.where(
            or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)),
        )

    async def _find_one(self, stmt: Select) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        provider_ids = {
            AuthProvider.GOOGLE: model.google_id,
            AuthProvider.GITHUB: model.github_id,
            AuthProvider.FACEBOOK: model.facebook_id,
        }
        return User.reconstitute(
            id=model.id,
            email=model.email,
            mobile=model.mobile,
            name=model.name,
            password_hash=model.password_hash,
            provider_ids={p: v for p, v in provider_ids.items() if v},
            avatar_url=model.avatar_url,
            is_active=model.is_active,
            email_verified=model.email_verified,
            last_login_at=_aware(model.last_login_at),
            reset_token=model.reset_token,
            reset_token_expiry=_aware(model.reset_token_expiry),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            mobile=user.mobile,
            name=user.name,
            password_hash=user.password_hash,
            google_id=user.google_id,
            github_id=user.github_id,
            facebook_id=user.facebook_id,
            avatar_url=user.avatar_url,
            is_active=user.is_active,
            email_verified=user.email_verified,
            last_login_at=user.last_login_at,
            reset_token=user.reset_token,
            reset_token_expiry=user.reset_token_expiry,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.mobile = user.mobile
        model.name = user.name
        model.password_hash = user.password_hash
        model.google_id = user.google_id
        model.github_id = user.github_id
        model.facebook_id = user.facebook_id
        model.avatar_url = user.avatar_url
        model.is_active = user.is_active
        model.email_verified = user.email_verified
        model.last_login_at = user.last_login_at
        model.reset_token = user.reset_token
        model.reset_token_expiry = user.reset_token_expiry
        model.updated_at = user.updated_at


def _aware(value: datetime | None) -> datetime | None:
    return ensure_tz_aware(value) if value else None
