"""Companies API: scope-filtered listing and guarded detail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from edition_access.api.v1.dependencies import (
    CurrentAccess,
    get_company_repo,
    get_resource_filter_builder,
    require_permission,
)
from edition_access.application.services import ResourceFilterBuilder
from edition_access.domain.enums import Permission, ResourceType
from edition_access.domain.exceptions import ResourceNotFoundException
from edition_access.infrastructure.persistence.repositories import CompanyRepository
from edition_access.schemas.user import CompanyResponse

router = APIRouter()


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    access: Annotated[CurrentAccess, Depends(require_permission(Permission.READ_COMPANY))],
    filter_builder: Annotated[ResourceFilterBuilder, Depends(get_resource_filter_builder)],
    company_repo: Annotated[CompanyRepository, Depends(get_company_repo)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List companies visible to the active role's scope."""
    spec = await filter_builder.get_resource_filter(
        access.role, access.user.id, ResourceType.COMPANY
    )
    companies = await company_repo.list_companies(spec, skip=skip, limit=limit)
    return [CompanyResponse.model_validate(c) for c in companies]


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    _: Annotated[CurrentAccess, Depends(require_permission(Permission.READ_COMPANY))],
    company_repo: Annotated[CompanyRepository, Depends(get_company_repo)],
):
    """Return one company (the guard checks company_id against the active role's scope)."""
    company = await company_repo.get_by_id(company_id)
    if company is None:
        raise ResourceNotFoundException("company", company_id)
    return CompanyResponse.model_validate(company)
