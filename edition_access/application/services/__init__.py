"""Application services: role catalog, permission evaluation, active role, request context, filters, grants."""

from edition_access.application.services.access_context import (
    COMPANY_OUTSIDE_EDITION_MESSAGE,
    AccessContextService,
)
from edition_access.application.services.active_role_service import ActiveRoleService
from edition_access.application.services.delegate_access_service import (
    DelegateAccessService,
)
from edition_access.application.services.permission_evaluator import PermissionEvaluator
from edition_access.application.services.resource_filter import (
    SCOPE_WIDENING_EXCEPTIONS,
    ResourceFilterBuilder,
)
from edition_access.application.services.role_catalog import (
    ROLE_DEFINITIONS,
    RoleDefinition,
    get_role_definition,
    list_role_definitions,
    role_has_permission,
)
from edition_access.application.services.role_grant_service import RoleGrantService

__all__ = [
    "COMPANY_OUTSIDE_EDITION_MESSAGE",
    "ROLE_DEFINITIONS",
    "SCOPE_WIDENING_EXCEPTIONS",
    "AccessContextService",
    "ActiveRoleService",
    "DelegateAccessService",
    "PermissionEvaluator",
    "ResourceFilterBuilder",
    "RoleDefinition",
    "RoleGrantService",
    "get_role_definition",
    "list_role_definitions",
    "role_has_permission",
]
