"""Ports implemented by infrastructure (SQLAlchemy) and test fakes."""

from edition_access.application.interfaces.repositories import (
    IChannelRepository,
    ICompanyRepository,
    IDelegateAccessRepository,
    IRoleGrantRepository,
    IRoleRepository,
    IUserRepository,
)

__all__ = [
    "IChannelRepository",
    "ICompanyRepository",
    "IDelegateAccessRepository",
    "IRoleGrantRepository",
    "IRoleRepository",
    "IUserRepository",
]
