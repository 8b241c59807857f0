"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from edition_access.domain.entities import DelegateAccessEntity, RoleGrantEntity
from edition_access.domain.enums import AccessScope, Permission, ResourceType, RoleName
from edition_access.domain.exceptions import (
    ActiveRoleRequiredException,
    AuthenticationException,
    DuplicateAssignmentException,
    EditionAccessException,
    InvalidRoleGrantException,
    PermissionDeniedException,
    ResourceNotFoundException,
    SelfDelegationException,
    UnknownAccessScopeException,
    UnknownRoleException,
    ValidationException,
)
from edition_access.domain.value_objects import (
    PermissionContext,
    PermissionResult,
    RoleContext,
)

__all__ = [
    # Entities
    "DelegateAccessEntity",
    "RoleGrantEntity",
    # Enums
    "AccessScope",
    "Permission",
    "ResourceType",
    "RoleName",
    # Exceptions
    "ActiveRoleRequiredException",
    "AuthenticationException",
    "DuplicateAssignmentException",
    "EditionAccessException",
    "InvalidRoleGrantException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "SelfDelegationException",
    "UnknownAccessScopeException",
    "UnknownRoleException",
    "ValidationException",
    # Value objects
    "PermissionContext",
    "PermissionResult",
    "RoleContext",
]
