"""Domain value objects: permission context and result, role context, active-role state, filter specs."""

from edition_access.domain.value_objects.core import (
    ActiveRole,
    ActiveRoleState,
    NoActiveRole,
    PermissionContext,
    PermissionResult,
    RoleContext,
    active_role_state,
)
from edition_access.domain.value_objects.filter_spec import (
    AnyOf,
    ByField,
    ById,
    FilterSpec,
    NoFilter,
)

__all__ = [
    "ActiveRole",
    "ActiveRoleState",
    "AnyOf",
    "ByField",
    "ById",
    "FilterSpec",
    "NoActiveRole",
    "NoFilter",
    "PermissionContext",
    "PermissionResult",
    "RoleContext",
    "active_role_state",
]
