"""Role catalog: the fixed mapping from role name to permissions and scope.

Built once at import time and exposed read-only. Every RoleName member has
exactly one definition; lookups never touch storage.
"""

from dataclasses import dataclass
from types import MappingProxyType

from edition_access.domain.enums import AccessScope, Permission, RoleName
from edition_access.domain.exceptions import UnknownRoleException


@dataclass(frozen=True)
class RoleDefinition:
    """Static definition of a catalog role."""

    name: RoleName
    display_name: str
    permissions: tuple[Permission, ...]
    scope: AccessScope
    description: str

    def has_permission(self, permission: Permission) -> bool:
        return permission in self.permissions


_SELF_SCOPE_PERMISSIONS: tuple[Permission, ...] = (
    Permission.READ_USER,
    Permission.UPDATE_USER,
    Permission.READ_COMPANY,
    Permission.READ_EDITION,
    Permission.READ_TAG,
    Permission.READ_COBRANDING,
)

_DEFINITIONS: tuple[RoleDefinition, ...] = (
    RoleDefinition(
        name=RoleName.SUPER_ADMIN,
        display_name="Super Admin",
        permissions=tuple(Permission),
        scope=AccessScope.GLOBAL,
        description="Full system access with all permissions",
    ),
    RoleDefinition(
        name=RoleName.EDITION_ADMIN,
        display_name="Edition Admin",
        permissions=(
            Permission.READ_USER,
            Permission.UPDATE_USER,
            Permission.CREATE_COMPANY,
            Permission.READ_COMPANY,
            Permission.UPDATE_COMPANY,
            Permission.DELETE_COMPANY,
            Permission.READ_EDITION,
            Permission.UPDATE_EDITION,
            Permission.CREATE_TAG,
            Permission.READ_TAG,
            Permission.UPDATE_TAG,
            Permission.DELETE_TAG,
            Permission.CREATE_CUSTOM_FIELD,
            Permission.READ_CUSTOM_FIELD,
            Permission.UPDATE_CUSTOM_FIELD,
            Permission.DELETE_CUSTOM_FIELD,
            Permission.CREATE_DELEGATE,
            Permission.READ_DELEGATE,
            Permission.UPDATE_DELEGATE,
            Permission.DELETE_DELEGATE,
            Permission.READ_SEAT_MANAGEMENT,
            Permission.UPDATE_SEAT_MANAGEMENT,
            Permission.READ_COBRANDING,
            Permission.UPDATE_COBRANDING,
            Permission.READ_AUDIT_LOGS,
        ),
        scope=AccessScope.EDITION,
        description="Limited access to assigned editions and their resources",
    ),
    RoleDefinition(
        name=RoleName.COMPANY_ADMIN,
        display_name="Company Admin",
        permissions=(
            Permission.READ_USER,
            Permission.UPDATE_USER,
            Permission.READ_COMPANY,
            Permission.UPDATE_COMPANY,
            Permission.READ_EDITION,
            Permission.READ_TAG,
            Permission.CREATE_DELEGATE,
            Permission.READ_DELEGATE,
            Permission.UPDATE_DELEGATE,
            Permission.DELETE_DELEGATE,
            Permission.READ_SEAT_MANAGEMENT,
            Permission.READ_COBRANDING,
        ),
        scope=AccessScope.COMPANY,
        description="Limited access to assigned company and its users",
    ),
    RoleDefinition(
        name=RoleName.USER,
        display_name="Standard User",
        permissions=_SELF_SCOPE_PERMISSIONS,
        scope=AccessScope.SELF,
        description="Basic user access to own resources",
    ),
    RoleDefinition(
        name=RoleName.DELEGATE,
        display_name="Delegate",
        permissions=_SELF_SCOPE_PERMISSIONS,
        scope=AccessScope.SELF,
        description="Access on behalf of delegated users with limited permissions",
    ),
)

ROLE_DEFINITIONS: MappingProxyType[RoleName, RoleDefinition] = MappingProxyType(
    {definition.name: definition for definition in _DEFINITIONS}
)


def get_role_definition(role: RoleName | str) -> RoleDefinition:
    """Return the catalog definition for role.

    Args:
        role: RoleName member or its string value (e.g. 'company_admin').

    Returns:
        The RoleDefinition for role.

    Raises:
        UnknownRoleException: If role is not a catalog role.
    """
    try:
        return ROLE_DEFINITIONS[RoleName(role)]
    except (KeyError, ValueError):
        raise UnknownRoleException(str(getattr(role, "value", role))) from None


def role_has_permission(role: RoleName | str, permission: Permission) -> bool:
    """Return True if role's catalog definition lists permission."""
    return get_role_definition(role).has_permission(permission)


def list_role_definitions() -> list[RoleDefinition]:
    """Return all role definitions in catalog order."""
    return list(ROLE_DEFINITIONS.values())
