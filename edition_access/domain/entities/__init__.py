"""Domain entities: role grants and delegate access grants."""

from edition_access.domain.entities.delegate_access import DelegateAccessEntity
from edition_access.domain.entities.role_grant import RoleGrantEntity

__all__ = [
    "DelegateAccessEntity",
    "RoleGrantEntity",
]
