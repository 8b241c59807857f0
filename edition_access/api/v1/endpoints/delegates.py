"""Delegates API: delegate grants and on-behalf checks."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from edition_access.api.v1.dependencies import (
    CurrentAccess,
    get_current_access,
    get_delegate_access_service,
    get_permission_evaluator,
    get_resource_filter_builder,
    require_permission,
)
from edition_access.application.services import (
    DelegateAccessService,
    PermissionEvaluator,
    ResourceFilterBuilder,
)
from edition_access.domain.entities import DelegateAccessEntity
from edition_access.domain.enums import Permission, ResourceType, RoleName
from edition_access.domain.exceptions import PermissionDeniedException
from edition_access.schemas.delegate import (
    DelegateAccessCreate,
    DelegateAccessResponse,
    DelegateCheckResponse,
)

router = APIRouter()


def _to_response(grant: DelegateAccessEntity) -> DelegateAccessResponse:
    return DelegateAccessResponse(
        id=grant.id,
        system_edition_id=grant.system_edition_id,
        delegator_id=grant.delegator_id,
        delegate_id=grant.delegate_id,
        permissions=sorted(grant.permissions, key=lambda p: p.value),
        is_active=grant.is_active,
        expiration_date=grant.expiration_date,
    )


@router.get("", response_model=list[DelegateAccessResponse])
async def list_delegates(
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.READ_DELEGATE))],
    filter_builder: Annotated[ResourceFilterBuilder, Depends(get_resource_filter_builder)],
    delegate_svc: Annotated[DelegateAccessService, Depends(get_delegate_access_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List delegate grants visible to the active role's scope."""
    spec = await filter_builder.get_resource_filter(
        access.role, access.user.id, ResourceType.DELEGATE
    )
    grants = await delegate_svc.list_grants(spec, skip=skip, limit=limit)
    return [_to_response(g) for g in grants]


@router.post("", response_model=DelegateAccessResponse, status_code=201)
async def create_delegate(
    body: DelegateAccessCreate,
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.CREATE_DELEGATE))],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    delegate_svc: Annotated[DelegateAccessService, Depends(get_delegate_access_service)],
):
    """Create a delegate grant; the caller must be able to create it for the delegator."""
    await evaluator.require_permission(
        Permission.CREATE_DELEGATE,
        access.permission_context(
            target_user_id=body.delegator_id,
            target_system_edition_id=body.system_edition_id,
        ),
    )
    grant = await delegate_svc.create_grant(
        system_edition_id=body.system_edition_id,
        delegator_id=body.delegator_id,
        delegate_id=body.delegate_id,
        permissions=body.permissions,
        expiration_date=body.expiration_date,
    )
    return _to_response(grant)


@router.delete("/{grant_id}", status_code=204)
async def delete_delegate(
    grant_id: str,
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.DELETE_DELEGATE))],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    delegate_svc: Annotated[DelegateAccessService, Depends(get_delegate_access_service)],
):
    """Soft delete a delegate grant the caller may manage for its delegator."""
    grant = await delegate_svc.get_grant(grant_id)
    await evaluator.require_permission(
        Permission.DELETE_DELEGATE,
        access.permission_context(
            target_user_id=grant.delegator_id,
            target_system_edition_id=grant.system_edition_id,
        ),
    )
    await delegate_svc.delete_grant(grant_id)


@router.get(
    "/on-behalf/{user_id}/check/{permission}", response_model=DelegateCheckResponse
)
async def check_delegate_access(
    user_id: str,
    permission: Permission,
    access: Annotated[CurrentAccess, Depends(get_current_access)],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
):
    """Report whether the caller, acting as delegate, may use permission for user_id."""
    if access.role != RoleName.DELEGATE:
        raise PermissionDeniedException(
            "Delegate access required", permission=permission.value
        )
    result = await evaluator.check_delegate_access(
        delegator_id=user_id, delegate_id=access.user.id, permission=permission
    )
    return DelegateCheckResponse(granted=result.granted, reason=result.reason)
