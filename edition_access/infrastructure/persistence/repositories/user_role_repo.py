"""UserRole repository: role grants mapped to RoleGrantEntity."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.domain.entities import RoleGrantEntity
from edition_access.domain.enums import RoleName
from edition_access.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
)
from edition_access.infrastructure.persistence.models.role import Role, UserRole
from edition_access.infrastructure.persistence.repositories.base import BaseRepository


def _grant_to_entity(ur: UserRole, role_name: str) -> RoleGrantEntity:
    """Map ORM UserRole (plus its role name) to the domain entity."""
    return RoleGrantEntity(
        id=ur.id,
        user_id=ur.user_id,
        role_id=ur.role_id,
        role_name=RoleName(role_name),
        granted_at=ur.granted_at,
        system_edition_id=ur.system_edition_id,
        company_id=ur.company_id,
        channel_id=ur.channel_id,
        is_active=ur.is_active,
        granted_by=ur.granted_by,
        expires_at=ur.expires_at,
        revoked_at=ur.revoked_at,
        revoked_by=ur.revoked_by,
    )


class UserRoleRepository(BaseRepository[UserRole]):
    """Role grants. Storage does not judge validity; RoleGrantEntity does."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserRole)

    def _select_with_role(self) -> Any:
        return select(UserRole, Role.name).join(Role, Role.id == UserRole.role_id)

    async def get_by_id(self, grant_id: str) -> RoleGrantEntity | None:
        result = await self.db.execute(
            self._select_with_role().where(UserRole.id == grant_id)
        )
        row = result.one_or_none()
        return _grant_to_entity(*row) if row else None

    async def list_for_user(
        self,
        user_id: str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
        active_only: bool = False,
    ) -> list[RoleGrantEntity]:
        stmt = self._select_with_role().where(UserRole.user_id == user_id)
        if system_edition_id is not None:
            stmt = stmt.where(UserRole.system_edition_id == system_edition_id)
        if company_id is not None:
            stmt = stmt.where(UserRole.company_id == company_id)
        if channel_id is not None:
            stmt = stmt.where(UserRole.channel_id == channel_id)
        if active_only:
            stmt = stmt.where(UserRole.is_active.is_(True), UserRole.revoked_at.is_(None))
        result = await self.db.execute(stmt.order_by(UserRole.granted_at, UserRole.id))
        return [_grant_to_entity(ur, name) for ur, name in result.all()]

    async def find_existing(
        self,
        user_id: str,
        role_id: str,
        system_edition_id: str | None,
        company_id: str | None,
        channel_id: str | None,
    ) -> RoleGrantEntity | None:
        stmt = self._select_with_role().where(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
            UserRole.system_edition_id.is_(None)
            if system_edition_id is None
            else UserRole.system_edition_id == system_edition_id,
            UserRole.company_id.is_(None)
            if company_id is None
            else UserRole.company_id == company_id,
            UserRole.channel_id.is_(None)
            if channel_id is None
            else UserRole.channel_id == channel_id,
        )
        row = (await self.db.execute(stmt.limit(1))).first()
        return _grant_to_entity(*row) if row else None

    async def create_grant(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        ur = UserRole(
            id=grant.id,
            user_id=grant.user_id,
            role_id=grant.role_id,
            system_edition_id=grant.system_edition_id,
            company_id=grant.company_id,
            channel_id=grant.channel_id,
            is_active=grant.is_active,
            granted_by=grant.granted_by,
            granted_at=grant.granted_at,
            expires_at=grant.expires_at,
            revoked_at=grant.revoked_at,
            revoked_by=grant.revoked_by,
        )
        try:
            await self.create(ur)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Role already granted to user",
                assignment_type="user_role",
                details_extra={"user_id": grant.user_id, "role_id": grant.role_id},
            ) from None
        return grant

    async def save(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        ur = await self.get_entity_by_id(grant.id)
        if ur is None:
            raise ResourceNotFoundException("role_grant", grant.id)
        ur.is_active = grant.is_active
        ur.expires_at = grant.expires_at
        ur.revoked_at = grant.revoked_at
        ur.revoked_by = grant.revoked_by
        await self.db.flush()
        return grant
