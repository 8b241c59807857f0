"""Repository dependencies (composition root).

Every repository in a request shares one transactional session: resolving the
active role may clear a stale pointer, so even read routes can write.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.infrastructure.persistence.database import get_db_transactional
from edition_access.infrastructure.persistence.repositories import (
    ChannelRepository,
    CompanyRepository,
    DelegateAccessRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)

DbSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_user_repo(db: DbSession) -> UserRepository:
    return UserRepository(db)


async def get_channel_repo(db: DbSession) -> ChannelRepository:
    return ChannelRepository(db)


async def get_company_repo(db: DbSession) -> CompanyRepository:
    return CompanyRepository(db)


async def get_role_repo(db: DbSession) -> RoleRepository:
    return RoleRepository(db)


async def get_role_grant_repo(db: DbSession) -> UserRoleRepository:
    return UserRoleRepository(db)


async def get_delegate_repo(db: DbSession) -> DelegateAccessRepository:
    return DelegateAccessRepository(db)
