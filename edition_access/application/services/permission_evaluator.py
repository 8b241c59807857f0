"""Permission evaluator: role permission check followed by scope boundary checks.

Denials are returned as PermissionResult values with a reason; only invariant
violations (unknown role or scope) raise. No results are cached; every call
reads the current membership of the acting and target principals.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from edition_access.application.interfaces.repositories import (
    ICompanyRepository,
    IDelegateAccessRepository,
    IUserRepository,
)
from edition_access.application.services.role_catalog import get_role_definition
from edition_access.domain.enums import AccessScope, Permission
from edition_access.domain.exceptions import (
    PermissionDeniedException,
    UnknownAccessScopeException,
)
from edition_access.domain.value_objects import PermissionContext, PermissionResult
from edition_access.shared.telemetry import add_span_attributes, get_logger, traced
from edition_access.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class PermissionEvaluator:
    """Decide whether a principal acting as a role may exercise a permission on a target."""

    def __init__(
        self,
        user_repo: IUserRepository,
        company_repo: ICompanyRepository,
        delegate_repo: IDelegateAccessRepository,
    ) -> None:
        self.user_repo = user_repo
        self.company_repo = company_repo
        self.delegate_repo = delegate_repo

    @traced("permission.check")
    async def check_permission(
        self, permission: Permission, context: PermissionContext
    ) -> PermissionResult:
        """Check permission for the context's role, then the role's scope boundary.

        Args:
            permission: Permission being exercised.
            context: Acting user, active role, and optional targets.

        Returns:
            PermissionResult; a denial carries the first failing reason.

        Raises:
            UnknownRoleException: If context.user_role is not a catalog role.
            UnknownAccessScopeException: If the role's scope is not handled.
        """
        definition = get_role_definition(context.user_role)
        if not definition.has_permission(permission):
            result = PermissionResult.deny(
                f"Role {definition.name.value} does not have permission {permission.value}"
            )
        else:
            result = await self._check_scope(definition.scope, context)
        add_span_attributes(
            **{
                "permission.name": permission.value,
                "permission.role": definition.name.value,
                "permission.granted": result.granted,
            }
        )
        if not result.granted:
            logger.debug(
                "Permission %s denied for user %s as %s: %s",
                permission.value,
                context.user_id,
                definition.name.value,
                result.reason,
            )
        return result

    async def _check_scope(
        self, scope: AccessScope, context: PermissionContext
    ) -> PermissionResult:
        if scope == AccessScope.GLOBAL:
            return PermissionResult.grant()
        elif scope == AccessScope.EDITION:
            return await self._check_edition_scope(context)
        elif scope == AccessScope.COMPANY:
            return await self._check_company_scope(context)
        elif scope == AccessScope.SELF:
            return self._check_self_scope(context)
        raise UnknownAccessScopeException(str(getattr(scope, "value", scope)))

    async def _check_edition_scope(self, context: PermissionContext) -> PermissionResult:
        user = await self.user_repo.get_by_id(context.user_id)
        if user is None or not user.system_edition_id:
            return PermissionResult.deny("User not assigned to any edition")
        edition_id = user.system_edition_id

        if (
            context.target_system_edition_id
            and context.target_system_edition_id != edition_id
        ):
            return PermissionResult.deny("Cannot access resources outside assigned edition")

        if context.target_company_id:
            company = await self.company_repo.get_by_id(context.target_company_id)
            if company is None or company.system_edition_id != edition_id:
                return PermissionResult.deny("Target company not in assigned edition")

        if context.target_user_id:
            target = await self.user_repo.get_by_id(context.target_user_id)
            if target is None or target.system_edition_id != edition_id:
                return PermissionResult.deny("Target user not in assigned edition")

        return PermissionResult.grant()

    async def _check_company_scope(self, context: PermissionContext) -> PermissionResult:
        # target_system_edition_id is not checked at company scope
        user = await self.user_repo.get_by_id(context.user_id)
        if user is None or not user.company_id:
            return PermissionResult.deny("User not assigned to any company")
        company_id = user.company_id

        if context.target_company_id and context.target_company_id != company_id:
            return PermissionResult.deny("Cannot access resources outside assigned company")

        if context.target_user_id:
            target = await self.user_repo.get_by_id(context.target_user_id)
            if target is None or target.company_id != company_id:
                return PermissionResult.deny("Target user not in assigned company")

        return PermissionResult.grant()

    def _check_self_scope(self, context: PermissionContext) -> PermissionResult:
        if context.target_user_id and context.target_user_id != context.user_id:
            return PermissionResult.deny("Can only access own resources")
        return PermissionResult.grant()

    @traced("permission.check_delegate")
    async def check_delegate_access(
        self,
        delegator_id: str,
        delegate_id: str,
        permission: Permission,
        now: datetime | None = None,
    ) -> PermissionResult:
        """Check whether delegate may exercise permission on behalf of delegator.

        Independent of role grants. Permission membership is exact.
        """
        grant = await self.delegate_repo.find_active_grant(delegate_id, delegator_id)
        if grant is None:
            result = PermissionResult.deny("No active delegate access found")
        elif not grant.allows(permission):
            result = PermissionResult.deny("Permission not granted in delegate access")
        elif grant.is_expired(now or utc_now()):
            result = PermissionResult.deny("Delegate access has expired")
        else:
            result = PermissionResult.grant()
        if not result.granted:
            logger.debug(
                "Delegate access %s denied for %s on behalf of %s: %s",
                permission.value,
                delegate_id,
                delegator_id,
                result.reason,
            )
        return result

    async def check_all_permissions(
        self, permissions: Iterable[Permission], context: PermissionContext
    ) -> PermissionResult:
        """Grant only if every permission is granted; return the first denial."""
        for permission in permissions:
            result = await self.check_permission(permission, context)
            if not result.granted:
                return result
        return PermissionResult.grant()

    async def check_any_permission(
        self, permissions: Iterable[Permission], context: PermissionContext
    ) -> PermissionResult:
        """Grant if at least one permission is granted; otherwise join every denial reason."""
        reasons: list[str] = []
        for permission in permissions:
            result = await self.check_permission(permission, context)
            if result.granted:
                return result
            if result.reason:
                reasons.append(result.reason)
        return PermissionResult.deny(", ".join(reasons) or "Insufficient permissions")

    async def require_permission(
        self, permission: Permission, context: PermissionContext
    ) -> None:
        """Raise PermissionDeniedException if permission is denied for context."""
        result = await self.check_permission(permission, context)
        if not result.granted:
            raise PermissionDeniedException(result.reason, permission=permission.value)
