"""Application DTOs (read-models, no ORM dependency)."""

from edition_access.application.dtos.company import ChannelResult, CompanyResult
from edition_access.application.dtos.role import RoleResult, RoleSwitchResult
from edition_access.application.dtos.user import UserResult

__all__ = [
    "ChannelResult",
    "CompanyResult",
    "RoleResult",
    "RoleSwitchResult",
    "UserResult",
]
