"""SQLAlchemy repositories implementing the application ports."""

from edition_access.infrastructure.persistence.repositories.base import BaseRepository
from edition_access.infrastructure.persistence.repositories.channel_repo import (
    ChannelRepository,
)
from edition_access.infrastructure.persistence.repositories.company_repo import (
    CompanyRepository,
)
from edition_access.infrastructure.persistence.repositories.delegate_access_repo import (
    DelegateAccessRepository,
)
from edition_access.infrastructure.persistence.repositories.role_repo import RoleRepository
from edition_access.infrastructure.persistence.repositories.user_repo import UserRepository
from edition_access.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "BaseRepository",
    "ChannelRepository",
    "CompanyRepository",
    "DelegateAccessRepository",
    "RoleRepository",
    "UserRepository",
    "UserRoleRepository",
]
