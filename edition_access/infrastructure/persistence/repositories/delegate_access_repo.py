"""DelegateAccess repository: soft-deleted rows are invisible to every read."""

from __future__ import annotations

from typing import Any

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.domain.entities import DelegateAccessEntity
from edition_access.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
)
from edition_access.domain.value_objects import FilterSpec
from edition_access.infrastructure.persistence.models.delegate_access import (
    DelegateAccess,
)
from edition_access.infrastructure.persistence.repositories.base import BaseRepository
from edition_access.shared.utils.datetime import utc_now


def _delegate_to_entity(d: DelegateAccess) -> DelegateAccessEntity:
    return DelegateAccessEntity(
        id=d.id,
        system_edition_id=d.system_edition_id,
        delegator_id=d.delegator_id,
        delegate_id=d.delegate_id,
        permissions=frozenset(d.permissions or []),
        is_active=d.is_active,
        expiration_date=d.expiration_date,
    )


class DelegateAccessRepository(BaseRepository[DelegateAccess]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DelegateAccess)

    def _select(self) -> Any:
        return select(DelegateAccess).where(DelegateAccess.deleted_at.is_(None))

    async def find_active_grant(
        self, delegate_id: str, delegator_id: str
    ) -> DelegateAccessEntity | None:
        result = await self.db.execute(
            self._select()
            .where(
                DelegateAccess.delegate_id == delegate_id,
                DelegateAccess.delegator_id == delegator_id,
                DelegateAccess.is_active.is_(True),
            )
            .order_by(DelegateAccess.created_at.desc())
            .limit(1)
        )
        grant = result.scalar_one_or_none()
        return _delegate_to_entity(grant) if grant else None

    async def get_by_id(self, grant_id: str) -> DelegateAccessEntity | None:
        grant = await self.get_entity_by_id(grant_id)
        return _delegate_to_entity(grant) if grant else None

    async def exists(
        self, system_edition_id: str, delegator_id: str, delegate_id: str
    ) -> bool:
        stmt = select(
            exists().where(
                DelegateAccess.system_edition_id == system_edition_id,
                DelegateAccess.delegator_id == delegator_id,
                DelegateAccess.delegate_id == delegate_id,
                DelegateAccess.deleted_at.is_(None),
            )
        )
        return bool((await self.db.execute(stmt)).scalar())

    async def create_grant(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        row = DelegateAccess(
            id=grant.id,
            system_edition_id=grant.system_edition_id,
            delegator_id=grant.delegator_id,
            delegate_id=grant.delegate_id,
            permissions=sorted(p.value for p in grant.permissions),
            is_active=grant.is_active,
            expiration_date=grant.expiration_date,
        )
        try:
            await self.create(row)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Delegate access already exists for this delegator and delegate",
                assignment_type="delegate_access",
                details_extra={
                    "delegator_id": grant.delegator_id,
                    "delegate_id": grant.delegate_id,
                },
            ) from None
        return grant

    async def save(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        row = await self.get_entity_by_id(grant.id)
        if row is None:
            raise ResourceNotFoundException("delegate_access", grant.id)
        row.permissions = sorted(p.value for p in grant.permissions)
        row.is_active = grant.is_active
        row.expiration_date = grant.expiration_date
        await self.db.flush()
        return grant

    async def soft_delete(self, grant_id: str) -> bool:
        row = await self.get_entity_by_id(grant_id)
        if row is None:
            return False
        row.deleted_at = utc_now()
        row.is_active = False
        await self.db.flush()
        return True

    async def list_grants(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[DelegateAccessEntity]:
        return [
            _delegate_to_entity(d) for d in await self.list_filtered(spec, skip, limit)
        ]
