"""Domain enumerations for the access engine.

Closed sets: permissions, access scopes, catalog role names, and the
resource types a scope filter can be built for.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Permission(_ValuesMixin, str, Enum):
    """Permission token checked by route guards (action:resource)."""

    # Users
    CREATE_USER = "create:user"
    READ_USER = "read:user"
    UPDATE_USER = "update:user"
    DELETE_USER = "delete:user"

    # Companies
    CREATE_COMPANY = "create:company"
    READ_COMPANY = "read:company"
    UPDATE_COMPANY = "update:company"
    DELETE_COMPANY = "delete:company"

    # System editions
    CREATE_EDITION = "create:edition"
    READ_EDITION = "read:edition"
    UPDATE_EDITION = "update:edition"
    DELETE_EDITION = "delete:edition"

    # Tags
    CREATE_TAG = "create:tag"
    READ_TAG = "read:tag"
    UPDATE_TAG = "update:tag"
    DELETE_TAG = "delete:tag"

    # Custom fields
    CREATE_CUSTOM_FIELD = "create:custom_field"
    READ_CUSTOM_FIELD = "read:custom_field"
    UPDATE_CUSTOM_FIELD = "update:custom_field"
    DELETE_CUSTOM_FIELD = "delete:custom_field"

    # Delegate access
    CREATE_DELEGATE = "create:delegate"
    READ_DELEGATE = "read:delegate"
    UPDATE_DELEGATE = "update:delegate"
    DELETE_DELEGATE = "delete:delegate"

    # Seat management
    READ_SEAT_MANAGEMENT = "read:seat_management"
    UPDATE_SEAT_MANAGEMENT = "update:seat_management"

    # Co-branding
    READ_COBRANDING = "read:cobranding"
    UPDATE_COBRANDING = "update:cobranding"

    # Audit logs
    READ_AUDIT_LOGS = "read:audit_logs"

    # System settings
    READ_SYSTEM_SETTINGS = "read:system_settings"
    UPDATE_SYSTEM_SETTINGS = "update:system_settings"


class AccessScope(_ValuesMixin, str, Enum):
    """Breadth of resources a role may act upon.

    Ordered GLOBAL ⊇ EDITION ⊇ COMPANY ⊇ SELF. Fixed per role, not per grant.
    """

    GLOBAL = "global"
    EDITION = "edition"
    COMPANY = "company"
    SELF = "self"

    @property
    def breadth(self) -> int:
        """Return rank of this scope (higher is broader)."""
        return _SCOPE_BREADTH[self]

    def covers(self, other: "AccessScope") -> bool:
        """Return True if this scope is at least as broad as other."""
        return self.breadth >= other.breadth


_SCOPE_BREADTH: dict[AccessScope, int] = {
    AccessScope.GLOBAL: 3,
    AccessScope.EDITION: 2,
    AccessScope.COMPANY: 1,
    AccessScope.SELF: 0,
}


class RoleName(_ValuesMixin, str, Enum):
    """Catalog role names. Every member has exactly one RoleDefinition."""

    SUPER_ADMIN = "super_admin"
    EDITION_ADMIN = "edition_admin"
    COMPANY_ADMIN = "company_admin"
    USER = "user"
    DELEGATE = "delegate"


class ResourceType(_ValuesMixin, str, Enum):
    """Resource kinds that list/query routes request a scope filter for."""

    USER = "user"
    COMPANY = "company"
    EDITION = "edition"
    TAG = "tag"
    DELEGATE = "delegate"
