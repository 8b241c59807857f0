"""Route guards: active role resolution, permission checks, delegate checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from edition_access.application.dtos.user import UserResult
from edition_access.application.services import (
    AccessContextService,
    ActiveRoleService,
    PermissionEvaluator,
)
from edition_access.application.services.active_role_service import NO_ACTIVE_ROLE_MESSAGE
from edition_access.domain.enums import Permission, RoleName
from edition_access.domain.exceptions import (
    ActiveRoleRequiredException,
    PermissionDeniedException,
)
from edition_access.domain.value_objects import PermissionContext, RoleContext

from . import auth
from . import db as db_deps
from . import services as service_deps

# Path or query parameters naming the scope a request wants to act in.
_SCOPE_PARAMS = ("system_edition_id", "company_id", "channel_id")


@dataclass(frozen=True)
class CurrentAccess:
    """Authenticated user plus the context of their validated active role."""

    user: UserResult
    context: RoleContext

    @property
    def role(self) -> RoleName:
        if self.context.role_name is None:
            raise ActiveRoleRequiredException(NO_ACTIVE_ROLE_MESSAGE)
        return self.context.role_name

    def permission_context(
        self,
        target_user_id: str | None = None,
        target_company_id: str | None = None,
        target_system_edition_id: str | None = None,
    ) -> PermissionContext:
        return PermissionContext(
            user_id=self.user.id,
            user_role=self.role,
            company_id=self.context.company_id,
            system_edition_id=self.context.system_edition_id,
            target_user_id=target_user_id,
            target_company_id=target_company_id,
            target_system_edition_id=target_system_edition_id,
        )


def _requested_scope(request: Request) -> dict[str, str | None]:
    return {
        name: request.path_params.get(name) or request.query_params.get(name)
        for name in _SCOPE_PARAMS
    }


async def get_current_access(
    request: Request,
    user: Annotated[UserResult, Depends(auth.get_current_user)],
    active_role_svc: Annotated[
        ActiveRoleService, Depends(service_deps.get_active_role_service)
    ],
    context_svc: Annotated[
        AccessContextService, Depends(service_deps.get_access_context_service)
    ],
    db: db_deps.DbSession,
) -> CurrentAccess:
    """Validate the active role and resolve the scope the request acts in.

    Raises 400 when no usable active role exists. A stale pointer cleared
    during validation is committed first, so the next request sees no active
    role instead of the same stale grant.
    """
    try:
        context = await active_role_svc.resolve_context(user.id)
    except ActiveRoleRequiredException as exc:
        if exc.details.get("cleared"):
            await db.commit()
        raise
    context = await context_svc.apply_requested_scope(context, **_requested_scope(request))
    return CurrentAccess(user=user, context=context)


def require_permission(permission: Permission):
    """Dependency factory: require an active role granting permission for the path targets.

    Targets come from the path parameters user_id, company_id, and system_edition_id.
    """

    async def _require(
        request: Request,
        access: Annotated[CurrentAccess, Depends(get_current_access)],
        evaluator: Annotated[
            PermissionEvaluator, Depends(service_deps.get_permission_evaluator)
        ],
    ) -> CurrentAccess:
        params = request.path_params
        await evaluator.require_permission(
            permission,
            access.permission_context(
                target_user_id=params.get("user_id"),
                target_company_id=params.get("company_id"),
                target_system_edition_id=params.get("system_edition_id"),
            ),
        )
        return access

    return _require


def require_delegate_access(permission: Permission):
    """Dependency factory: require acting as delegate with a usable grant from path user_id."""

    async def _require(
        request: Request,
        access: Annotated[CurrentAccess, Depends(get_current_access)],
        evaluator: Annotated[
            PermissionEvaluator, Depends(service_deps.get_permission_evaluator)
        ],
    ) -> CurrentAccess:
        if access.role != RoleName.DELEGATE:
            raise PermissionDeniedException(
                "Delegate access required", permission=permission.value
            )
        delegator_id = request.path_params.get("user_id")
        if not delegator_id:
            raise PermissionDeniedException(
                "Target user ID required for delegate access", permission=permission.value
            )
        result = await evaluator.check_delegate_access(
            delegator_id=delegator_id,
            delegate_id=access.user.id,
            permission=permission,
        )
        if not result.granted:
            raise PermissionDeniedException(result.reason, permission=permission.value)
        return access

    return _require
