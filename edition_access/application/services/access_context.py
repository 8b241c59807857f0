"""Request context: which edition, company and channel a request acts in.

The active grant fixes the context for most roles. A super admin may act in
any edition, company or channel the request names; an edition admin may
narrow to a company, but only one of their own edition.
"""

from __future__ import annotations

from dataclasses import replace

from edition_access.application.interfaces.repositories import (
    IChannelRepository,
    ICompanyRepository,
)
from edition_access.domain.enums import RoleName
from edition_access.domain.exceptions import PermissionDeniedException
from edition_access.domain.value_objects import RoleContext
from edition_access.shared.telemetry import get_logger

logger = get_logger(__name__)

COMPANY_OUTSIDE_EDITION_MESSAGE = "Company does not belong to your system edition"

# Roles bound to the company (and edition) of their grant.
_GRANT_BOUND_ROLES = frozenset({RoleName.COMPANY_ADMIN, RoleName.USER, RoleName.DELEGATE})


class AccessContextService:
    """Resolve requested scope against the active role context."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        channel_repo: IChannelRepository,
    ) -> None:
        self.company_repo = company_repo
        self.channel_repo = channel_repo

    async def _company_in_edition(self, company_id: str, system_edition_id: str | None) -> bool:
        if not system_edition_id:
            return False
        company = await self.company_repo.get_by_id(company_id)
        return company is not None and company.system_edition_id == system_edition_id

    async def apply_requested_scope(
        self,
        context: RoleContext,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
    ) -> RoleContext:
        """Return context adjusted to the edition/company/channel the request names.

        Super admins adopt every requested id. Edition admins adopt a requested
        company of their edition. Other roles keep their grant's context.

        Raises:
            PermissionDeniedException: Edition admin requested a company that is
                missing or belongs to another edition.
        """
        if context.role_name == RoleName.SUPER_ADMIN:
            return replace(
                context,
                system_edition_id=system_edition_id or context.system_edition_id,
                company_id=company_id or context.company_id,
                channel_id=channel_id or context.channel_id,
            )
        if context.role_name == RoleName.EDITION_ADMIN and company_id:
            if not await self._company_in_edition(company_id, context.system_edition_id):
                logger.debug(
                    "Edition admin in %s requested company %s outside the edition",
                    context.system_edition_id,
                    company_id,
                )
                raise PermissionDeniedException(COMPANY_OUTSIDE_EDITION_MESSAGE)
            return replace(context, company_id=company_id)
        return context

    async def can_access_company(self, context: RoleContext, company_id: str | None) -> bool:
        if not company_id:
            return False
        if context.role_name == RoleName.SUPER_ADMIN:
            return True
        if context.role_name == RoleName.EDITION_ADMIN:
            return await self._company_in_edition(company_id, context.system_edition_id)
        if context.role_name in _GRANT_BOUND_ROLES:
            return context.company_id == company_id
        return False

    def can_access_edition(self, context: RoleContext, system_edition_id: str | None) -> bool:
        if not system_edition_id or context.role_name is None:
            return False
        if context.role_name == RoleName.SUPER_ADMIN:
            return True
        return context.system_edition_id == system_edition_id

    async def can_access_channel(self, context: RoleContext, channel_id: str | None) -> bool:
        """Super admins reach every channel, edition admins the channels of their
        edition, and any other role only the channel its grant names."""
        if not channel_id or context.role_name is None:
            return False
        if context.role_name == RoleName.SUPER_ADMIN:
            return True
        if context.role_name == RoleName.EDITION_ADMIN:
            if not context.system_edition_id:
                return False
            channel = await self.channel_repo.get_by_id(channel_id)
            return channel is not None and channel.system_edition_id == context.system_edition_id
        return context.channel_id == channel_id
