"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.application.dtos.user import UserResult
from edition_access.domain.value_objects import FilterSpec
from edition_access.infrastructure.persistence.models.user import User
from edition_access.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        email=u.email,
        system_edition_id=u.system_edition_id,
        company_id=u.company_id,
        active_user_role_id=u.active_user_role_id,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User reads and the active role pointer write."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_entity_by_id(user_id)
        return _user_to_result(user) if user else None

    async def set_active_user_role(self, user_id: str, grant_id: str | None) -> None:
        """Single-row UPDATE of active_user_role_id (None clears it)."""
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(active_user_role_id=grant_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.flush()

    async def list_users(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        return [_user_to_result(u) for u in await self.list_filtered(spec, skip, limit)]
