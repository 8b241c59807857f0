"""Role repository. Read methods return RoleResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.application.dtos.role import RoleResult
from edition_access.domain.enums import RoleName
from edition_access.infrastructure.persistence.models.role import Role
from edition_access.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=RoleName(r.name),
        description=r.description,
        is_active=r.is_active,
    )


class RoleRepository(BaseRepository[Role]):
    """Role rows seeded from the catalog (scripts/seed_roles.py)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        role = await self.get_entity_by_id(role_id)
        return _role_to_result(role) if role else None

    async def get_by_name(self, name: RoleName) -> RoleResult | None:
        result = await self.db.execute(select(Role).where(Role.name == RoleName(name).value))
        role = result.scalar_one_or_none()
        return _role_to_result(role) if role else None

    async def create_role(
        self,
        name: RoleName,
        access_scope: str,
        description: str | None = None,
    ) -> RoleResult:
        role = await self.create(
            Role(
                name=RoleName(name).value,
                access_scope=access_scope,
                description=description,
                is_active=True,
            )
        )
        return _role_to_result(role)
