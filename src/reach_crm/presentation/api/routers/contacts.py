"""Contact directory router."""

from uuid import UUID

from fastapi import APIRouter

from reach_crm.domain.contact import ContactNotFoundError
from reach_crm.presentation.api.dependencies import CurrentPayload, Directory
from reach_crm.presentation.api.schemas.directory import (
    ContactDetailResponse,
    ContactListResponse,
    ContactResponse,
)

router = APIRouter()


@router.get("", summary="List contacts")
async def list_contacts(_: CurrentPayload, directory: Directory) -> ContactListResponse:
    contacts = await directory.list_contacts()
    return ContactListResponse(
        data=[ContactResponse.from_dict(c.to_dict()) for c in contacts],
    )


@router.get(
    "/{user_id}",
    summary="Get a user's contact card",
    responses={404: {"description": "Contact not found"}},
)
async def get_contact(
    user_id: str,
    _: CurrentPayload,
    directory: Directory,
) -> ContactDetailResponse:
    try:
        parsed_id = UUID(user_id)
    except ValueError as e:
        raise ContactNotFoundError(user_id) from e

    contact = await directory.get_contact(parsed_id)
    return ContactDetailResponse(data=ContactResponse.from_dict(contact.to_dict()))
