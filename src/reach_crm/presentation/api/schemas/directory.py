"""Schemas for the user and contact directory."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from reach_crm.presentation.api.schemas.auth import UserResponse


class ContactResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    job_title: str | None = None
    notes: str | None = None
    created_at: str
    updated_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContactResponse":
        return cls.model_validate(data)


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int


class UserListResponse(BaseModel):
    success: bool = True
    data: list[UserResponse]
    meta: PageMeta


class UserDetailResponse(BaseModel):
    success: bool = True
    data: UserResponse


class ContactListResponse(BaseModel):
    success: bool = True
    data: list[ContactResponse]


class ContactDetailResponse(BaseModel):
    success: bool = True
    data: ContactResponse
