"""User directory router."""

import re
from uuid import UUID

from fastapi import APIRouter, Query

from reach_crm.presentation.api.dependencies import CurrentPayload, Directory
from reach_crm.presentation.api.schemas.auth import UserResponse
from reach_crm.presentation.api.schemas.directory import (
    PageMeta,
    UserDetailResponse,
    UserListResponse,
)
from reach_identity.domain.user import UserNotFoundError

router = APIRouter()

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _lenient_int(raw: str | None) -> int:
    """Leading integer of a query value, or 0 when there is none."""
    match = _LEADING_INT.match(raw or "")
    return int(match.group(1)) if match else 0


@router.get("", summary="Search users")
async def list_users(
    _: CurrentPayload,
    directory: Directory,
    search: str | None = Query(default=None, description="Name or email fragment"),
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Page size (default 20)"),
) -> UserListResponse:
    result = await directory.list_users(
        search=search,
        page=_lenient_int(page),
        limit=_lenient_int(limit),
    )
    return UserListResponse(
        data=[UserResponse.from_public_dict(u.to_public_dict()) for u in result.users],
        meta=PageMeta(total=result.total, page=result.page, limit=result.limit),
    )


@router.get(
    "/{user_id}",
    summary="Get user by id",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: str,
    _: CurrentPayload,
    directory: Directory,
) -> UserDetailResponse:
    try:
        parsed_id = UUID(user_id)
    except ValueError as e:
        raise UserNotFoundError(user_id) from e

    user = await directory.get_user(parsed_id)
    return UserDetailResponse(data=UserResponse.from_public_dict(user.to_public_dict()))
