"""Persistence models: ORM entities and mixins."""

from edition_access.infrastructure.persistence.models.delegate_access import (
    DelegateAccess,
)
from edition_access.infrastructure.persistence.models.mixins import (
    AuditedModel,
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from edition_access.infrastructure.persistence.models.role import Role, UserRole
from edition_access.infrastructure.persistence.models.tenancy import (
    Channel,
    Company,
    SystemEdition,
)
from edition_access.infrastructure.persistence.models.user import User

__all__ = [
    "SystemEdition",
    "Company",
    "Channel",
    "User",
    "Role",
    "UserRole",
    "DelegateAccess",
    "CuidMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
    "AuditedModel",
]
