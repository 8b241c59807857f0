"""Application service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from edition_access.application.services import (
    AccessContextService,
    ActiveRoleService,
    DelegateAccessService,
    PermissionEvaluator,
    ResourceFilterBuilder,
    RoleGrantService,
)
from edition_access.infrastructure.persistence.repositories import (
    ChannelRepository,
    CompanyRepository,
    DelegateAccessRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)

from . import db as db_deps


async def get_permission_evaluator(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo)],
    delegate_repo: Annotated[DelegateAccessRepository, Depends(db_deps.get_delegate_repo)],
) -> PermissionEvaluator:
    return PermissionEvaluator(user_repo, company_repo, delegate_repo)


async def get_active_role_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    grant_repo: Annotated[UserRoleRepository, Depends(db_deps.get_role_grant_repo)],
) -> ActiveRoleService:
    return ActiveRoleService(user_repo, grant_repo)


async def get_resource_filter_builder(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
) -> ResourceFilterBuilder:
    return ResourceFilterBuilder(user_repo)


async def get_delegate_access_service(
    delegate_repo: Annotated[DelegateAccessRepository, Depends(db_deps.get_delegate_repo)],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
) -> DelegateAccessService:
    return DelegateAccessService(delegate_repo, user_repo)


async def get_role_grant_service(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    grant_repo: Annotated[UserRoleRepository, Depends(db_deps.get_role_grant_repo)],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
) -> RoleGrantService:
    return RoleGrantService(role_repo, grant_repo, user_repo)


async def get_access_context_service(
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo)],
    channel_repo: Annotated[ChannelRepository, Depends(db_deps.get_channel_repo)],
) -> AccessContextService:
    return AccessContextService(company_repo, channel_repo)
