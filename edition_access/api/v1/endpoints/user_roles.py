"""User-roles API: available grants, active role selection, switching, and grant lifecycle."""

from typing import Annotated

from fastapi import APIRouter, Depends

from edition_access.api.v1.dependencies import (
    CurrentAccess,
    get_access_context_service,
    get_active_role_service,
    get_current_user,
    get_permission_evaluator,
    get_role_grant_service,
    require_permission,
)
from edition_access.application.dtos.user import UserResult
from edition_access.application.services import (
    AccessContextService,
    ActiveRoleService,
    PermissionEvaluator,
    RoleGrantService,
    get_role_definition,
)
from edition_access.domain.entities import RoleGrantEntity
from edition_access.domain.enums import AccessScope, Permission
from edition_access.domain.exceptions import PermissionDeniedException
from edition_access.schemas.role import (
    ActiveRoleResponse,
    ActiveRoleValidationResponse,
    RoleContextResponse,
    RoleGrantCreate,
    RoleGrantResponse,
    RoleSwitchResponse,
    SetActiveRoleRequest,
)

router = APIRouter()


async def _active_role_response(
    user_id: str, active_role_svc: ActiveRoleService
) -> ActiveRoleResponse:
    active = await active_role_svc.get_active_role(user_id)
    context = await active_role_svc.get_current_context(user_id)
    return ActiveRoleResponse(
        active_role=RoleGrantResponse.model_validate(active) if active else None,
        context=RoleContextResponse.model_validate(context),
        has_active_role=await active_role_svc.has_active_role(user_id),
    )


async def _load_grant_for_admin(
    grant_id: str,
    access: CurrentAccess,
    evaluator: PermissionEvaluator,
    grant_svc: RoleGrantService,
) -> RoleGrantEntity:
    """Return the grant if the caller may update its holder."""
    grant = await grant_svc.get_grant(grant_id)
    await evaluator.require_permission(
        Permission.UPDATE_USER, access.permission_context(target_user_id=grant.user_id)
    )
    return grant


async def _require_grant_context(
    access: CurrentAccess, context_svc: AccessContextService, body: RoleGrantCreate
) -> None:
    """Raise unless the grant's edition, company and channel are within the caller's context."""
    ctx = access.context
    denied: tuple[str, str] | None = None
    if body.system_edition_id and not context_svc.can_access_edition(ctx, body.system_edition_id):
        denied = ("system edition", body.system_edition_id)
    elif body.company_id and not await context_svc.can_access_company(ctx, body.company_id):
        denied = ("company", body.company_id)
    elif body.channel_id and not await context_svc.can_access_channel(ctx, body.channel_id):
        denied = ("channel", body.channel_id)
    if denied is not None:
        raise PermissionDeniedException(
            f"Cannot grant roles in {denied[0]} {denied[1]}",
            permission=Permission.UPDATE_USER.value,
        )


@router.get("/available", response_model=list[RoleGrantResponse])
async def list_available_roles(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """List the current user's grants that can be selected as the active role."""
    grants = await active_role_svc.get_available_roles(current_user.id)
    return [RoleGrantResponse.model_validate(g) for g in grants]


@router.get("/active", response_model=ActiveRoleResponse)
async def get_active_role(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """Return the current active role grant and its context."""
    return await _active_role_response(current_user.id, active_role_svc)


@router.post("/active", response_model=ActiveRoleResponse)
async def set_active_role(
    body: SetActiveRoleRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """Select one of the current user's valid grants as the active role."""
    await active_role_svc.set_active_role(current_user.id, body.user_role_id)
    return await _active_role_response(current_user.id, active_role_svc)


@router.delete("/active", status_code=204)
async def clear_active_role(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """Clear the active role."""
    await active_role_svc.clear_active_role(current_user.id)


@router.get("/active/validate", response_model=ActiveRoleValidationResponse)
async def validate_active_role(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """Validate the active role; an unusable one is cleared."""
    is_valid = await active_role_svc.validate_active_role(current_user.id)
    return ActiveRoleValidationResponse(
        is_valid=is_valid,
        has_active_role=await active_role_svc.has_active_role(current_user.id),
        message="Active role is valid" if is_valid else "Active role is invalid or expired",
    )


@router.post("/switch", response_model=RoleSwitchResponse)
async def switch_role(
    body: SetActiveRoleRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    active_role_svc: Annotated[ActiveRoleService, Depends(get_active_role_service)],
):
    """Switch the active role to another available grant."""
    result = await active_role_svc.switch_role(current_user.id, body.user_role_id)
    return RoleSwitchResponse(
        previous_role=result.previous_role,
        new_role=result.new_role,
        context=RoleContextResponse.model_validate(result.context),
    )


@router.post("/grants", response_model=RoleGrantResponse, status_code=201)
async def assign_role(
    body: RoleGrantCreate,
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.UPDATE_USER))],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    context_svc: Annotated[AccessContextService, Depends(get_access_context_service)],
    grant_svc: Annotated[RoleGrantService, Depends(get_role_grant_service)],
):
    """Grant a role to a user.

    Below global scope only roles narrower than the caller's can be granted, and
    the grant's edition, company and channel must lie within the caller's context.
    """
    await evaluator.require_permission(
        Permission.UPDATE_USER,
        access.permission_context(
            target_user_id=body.user_id,
            target_company_id=body.company_id,
            target_system_edition_id=body.system_edition_id,
        ),
    )
    granted_scope = get_role_definition(body.role_name).scope
    own_scope = get_role_definition(access.role).scope
    if own_scope != AccessScope.GLOBAL and (
        own_scope == granted_scope or not own_scope.covers(granted_scope)
    ):
        raise PermissionDeniedException(
            f"Role {access.role.value} cannot grant role {body.role_name.value}",
            permission=Permission.UPDATE_USER.value,
        )
    await _require_grant_context(access, context_svc, body)
    grant = await grant_svc.assign_role(
        user_id=body.user_id,
        role_name=body.role_name,
        system_edition_id=body.system_edition_id,
        company_id=body.company_id,
        channel_id=body.channel_id,
        granted_by=access.user.id,
        expires_at=body.expires_at,
    )
    return RoleGrantResponse.model_validate(grant)


@router.delete("/grants/{grant_id}", response_model=RoleGrantResponse)
async def revoke_role(
    grant_id: str,
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.UPDATE_USER))],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    grant_svc: Annotated[RoleGrantService, Depends(get_role_grant_service)],
):
    """Revoke a role grant. Its holder loses it as active role on next validation."""
    grant = await _load_grant_for_admin(grant_id, access, evaluator, grant_svc)
    revoked = await grant_svc.revoke_role(grant.id, revoked_by=access.user.id)
    return RoleGrantResponse.model_validate(revoked)


@router.post("/grants/{grant_id}/reactivate", response_model=RoleGrantResponse)
async def reactivate_role(
    grant_id: str,
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.UPDATE_USER))],
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    grant_svc: Annotated[RoleGrantService, Depends(get_role_grant_service)],
):
    """Reactivate a revoked role grant (expiry unchanged)."""
    grant = await _load_grant_for_admin(grant_id, access, evaluator, grant_svc)
    reactivated = await grant_svc.reactivate_role(grant.id)
    return RoleGrantResponse.model_validate(reactivated)
