"""Roles API: the static role catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends

from edition_access.api.v1.dependencies import get_current_user_id
from edition_access.application.services import list_role_definitions
from edition_access.schemas.role import RoleDefinitionResponse

router = APIRouter()


@router.get("", response_model=list[RoleDefinitionResponse])
async def list_roles(
    _: Annotated[str, Depends(get_current_user_id)],
):
    """List catalog roles with their scope and permissions (catalog order)."""
    return [RoleDefinitionResponse.model_validate(d) for d in list_role_definitions()]
