"""Company repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from edition_access.application.dtos.company import CompanyResult
from edition_access.domain.value_objects import FilterSpec
from edition_access.infrastructure.persistence.models.tenancy import Company
from edition_access.infrastructure.persistence.repositories.base import BaseRepository


def _company_to_result(c: Company) -> CompanyResult:
    return CompanyResult(id=c.id, name=c.name, system_edition_id=c.system_edition_id)


class CompanyRepository(BaseRepository[Company]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Company)

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        company = await self.get_entity_by_id(company_id)
        return _company_to_result(company) if company else None

    async def list_companies(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[CompanyResult]:
        return [
            _company_to_result(c) for c in await self.list_filtered(spec, skip, limit)
        ]
