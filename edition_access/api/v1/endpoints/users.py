"""Users API: scope-filtered listing and guarded detail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from edition_access.api.v1.dependencies import (
    CurrentAccess,
    get_resource_filter_builder,
    get_user_repo,
    require_delegate_access,
    require_permission,
)
from edition_access.application.services import ResourceFilterBuilder
from edition_access.domain.enums import Permission, ResourceType
from edition_access.domain.exceptions import ResourceNotFoundException
from edition_access.infrastructure.persistence.repositories import UserRepository
from edition_access.schemas.user import UserResponse

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.READ_USER))],
    filter_builder: Annotated[ResourceFilterBuilder, Depends(get_resource_filter_builder)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List users visible to the active role's scope."""
    spec = await filter_builder.get_resource_filter(
        access.role, access.user.id, ResourceType.USER
    )
    users = await user_repo.list_users(spec, skip=skip, limit=limit)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _: Annotated[CurrentAccess, Depends(require_permission(Permission.READ_USER))],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Return one user (the guard checks user_id against the active role's scope)."""
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundException("user", user_id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/on-behalf", response_model=UserResponse)
async def get_user_on_behalf(
    user_id: str,
    _: Annotated[CurrentAccess, Depends(require_delegate_access(Permission.READ_USER))],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Return the delegator's profile to a delegate holding read:user for them."""
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundException("user", user_id)
    return UserResponse.model_validate(user)
