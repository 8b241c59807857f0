"""Base repository: entity lookup, scope-filtered listing, and create/flush."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.domain.value_objects import FilterSpec
from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.filters import filter_to_clause


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository over one ORM model.

    Subclasses expose interface methods returning DTOs or domain entities;
    the ORM-returning helpers here are for their internal use.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def _select(self) -> Any:
        """Base SELECT for this model (subclasses add soft-delete conditions)."""
        return select(self.model)

    async def get_entity_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(self._select().where(model.id == entity_id))
        return result.unique().scalar_one_or_none()

    async def list_filtered(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[ModelType]:
        """Return ORM records matching spec with pagination (ordered by id)."""
        model: Any = self.model
        result = await self.db.execute(
            self._select()
            .where(filter_to_clause(self.model, spec))
            .order_by(model.id)
            .offset(skip)
            .limit(limit)
        )
        return list(result.unique().scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
