"""Resource filter builder: scope-derived query restrictions for list routes.

Returns a FilterSpec value; persistence adapters translate it into a query
(see edition_access.infrastructure.persistence.filters).
"""

from __future__ import annotations

from edition_access.application.dtos.user import UserResult
from edition_access.application.interfaces.repositories import IUserRepository
from edition_access.application.services.role_catalog import get_role_definition
from edition_access.domain.enums import AccessScope, ResourceType, RoleName
from edition_access.domain.exceptions import (
    ResourceNotFoundException,
    UnknownAccessScopeException,
    ValidationException,
)
from edition_access.domain.value_objects import AnyOf, ByField, ById, FilterSpec, NoFilter
from edition_access.shared.telemetry import get_logger, traced

logger = get_logger(__name__)

# (scope, resource type) pairs whose filter is broader than the scope itself:
# these resources are only tracked per edition.
SCOPE_WIDENING_EXCEPTIONS: frozenset[tuple[AccessScope, ResourceType]] = frozenset({
    (AccessScope.COMPANY, ResourceType.TAG),
    (AccessScope.COMPANY, ResourceType.DELEGATE),
    (AccessScope.SELF, ResourceType.TAG),
})


def _edition_scope_filter(user: UserResult, resource_type: ResourceType) -> FilterSpec:
    if resource_type == ResourceType.EDITION:
        return ById(user.system_edition_id)
    return ByField("system_edition_id", user.system_edition_id)


def _company_scope_filter(user: UserResult, resource_type: ResourceType) -> FilterSpec:
    if resource_type == ResourceType.USER:
        return ByField("company_id", user.company_id)
    if resource_type == ResourceType.COMPANY:
        return ById(user.company_id)
    if resource_type == ResourceType.EDITION:
        return ById(user.system_edition_id)
    return ByField("system_edition_id", user.system_edition_id)


def _self_scope_filter(user: UserResult, resource_type: ResourceType) -> FilterSpec:
    if resource_type == ResourceType.USER:
        return ById(user.id)
    if resource_type == ResourceType.COMPANY:
        return ById(user.company_id)
    if resource_type == ResourceType.EDITION:
        return ById(user.system_edition_id)
    if resource_type == ResourceType.DELEGATE:
        return AnyOf((ByField("delegator_id", user.id), ByField("delegate_id", user.id)))
    return ByField("system_edition_id", user.system_edition_id)


class ResourceFilterBuilder:
    """Build the FilterSpec a role's scope imposes on a resource listing."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    @traced("permission.resource_filter")
    async def get_resource_filter(
        self,
        role: RoleName,
        user_id: str,
        resource_type: ResourceType | str,
    ) -> FilterSpec:
        """Return the filter for listing resource_type as user_id acting as role.

        Raises:
            ValidationException: If resource_type is not a known resource type.
            ResourceNotFoundException: If the acting user does not exist.
            UnknownAccessScopeException: If the role's scope is not handled.
        """
        try:
            resource_type = ResourceType(resource_type)
        except ValueError:
            raise ValidationException(
                f"Unknown resource type: {resource_type}", field="resource_type"
            ) from None
        scope = get_role_definition(role).scope
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)

        if scope == AccessScope.GLOBAL:
            return NoFilter()
        elif scope == AccessScope.EDITION:
            spec = _edition_scope_filter(user, resource_type)
        elif scope == AccessScope.COMPANY:
            spec = _company_scope_filter(user, resource_type)
        elif scope == AccessScope.SELF:
            spec = _self_scope_filter(user, resource_type)
        else:
            raise UnknownAccessScopeException(str(getattr(scope, "value", scope)))

        if (scope, resource_type) in SCOPE_WIDENING_EXCEPTIONS:
            logger.debug(
                "Filter for %s at %s scope widened to edition %s",
                resource_type.value,
                scope.value,
                user.system_edition_id,
            )
        return spec
