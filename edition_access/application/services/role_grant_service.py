"""Role grant lifecycle: assign, revoke, reactivate, and query role grants."""

from __future__ import annotations

from datetime import datetime

from edition_access.application.interfaces.repositories import (
    IRoleGrantRepository,
    IRoleRepository,
    IUserRepository,
)
from edition_access.application.services.role_catalog import get_role_definition
from edition_access.domain.entities import RoleGrantEntity
from edition_access.domain.enums import AccessScope, RoleName
from edition_access.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from edition_access.shared.telemetry import get_logger
from edition_access.shared.utils.datetime import utc_now
from edition_access.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class RoleGrantService:
    """Manage user_role grants. Storage does not check grant context; this service does."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        grant_repo: IRoleGrantRepository,
        user_repo: IUserRepository,
    ) -> None:
        self._role_repo = role_repo
        self._grant_repo = grant_repo
        self._user_repo = user_repo

    async def assign_role(
        self,
        user_id: str,
        role_name: RoleName | str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
        granted_by: str | None = None,
        expires_at: datetime | None = None,
    ) -> RoleGrantEntity:
        """Grant role_name to user_id within the given context.

        Raises:
            UnknownRoleException: If role_name is not a catalog role.
            ValidationException: If a non-global role has no context id.
            ResourceNotFoundException: If the user or the role row is missing.
            DuplicateAssignmentException: If the same (user, role, context) grant exists.
        """
        definition = get_role_definition(role_name)
        if definition.scope != AccessScope.GLOBAL and not (
            system_edition_id or company_id or channel_id
        ):
            raise ValidationException(
                f"Role {definition.name.value} requires a system edition, company, or channel",
                field="system_edition_id",
            )
        if await self._user_repo.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        role = await self._role_repo.get_by_name(definition.name)
        if role is None:
            raise ResourceNotFoundException("role", definition.name.value)

        existing = await self._grant_repo.find_existing(
            user_id, role.id, system_edition_id, company_id, channel_id
        )
        if existing is not None:
            raise DuplicateAssignmentException(
                f"User already has role {definition.name.value} in this context",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role.id, "grant_id": existing.id},
            )

        grant = RoleGrantEntity(
            id=generate_cuid(),
            user_id=user_id,
            role_id=role.id,
            role_name=definition.name,
            granted_at=utc_now(),
            system_edition_id=system_edition_id,
            company_id=company_id,
            channel_id=channel_id,
            granted_by=granted_by,
            expires_at=expires_at,
        )
        created = await self._grant_repo.create_grant(grant)
        logger.info(
            "Granted role %s to user %s (grant %s)", definition.name.value, user_id, created.id
        )
        return created

    async def get_grant(self, grant_id: str) -> RoleGrantEntity:
        """Return grant by id; raise ResourceNotFoundException if missing."""
        grant = await self._grant_repo.get_by_id(grant_id)
        if grant is None:
            raise ResourceNotFoundException("role_grant", grant_id)
        return grant

    async def revoke_role(self, grant_id: str, revoked_by: str | None) -> RoleGrantEntity:
        """Revoke a grant. A user pointing at it is cleared on their next validation."""
        grant = await self.get_grant(grant_id)
        grant.revoke(revoked_by, utc_now())
        saved = await self._grant_repo.save(grant)
        logger.info("Revoked role grant %s by %s", grant_id, revoked_by)
        return saved

    async def reactivate_role(self, grant_id: str) -> RoleGrantEntity:
        """Reactivate a revoked or inactive grant. Expiry is unchanged."""
        grant = await self.get_grant(grant_id)
        grant.reactivate()
        saved = await self._grant_repo.save(grant)
        logger.info("Reactivated role grant %s", grant_id)
        return saved

    async def get_user_roles(
        self,
        user_id: str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
        active_only: bool = True,
    ) -> list[RoleName]:
        """Return role names granted to user_id, optionally narrowed by context.

        With active_only, revoked, inactive, and expired grants are skipped.
        """
        grants = await self._grant_repo.list_for_user(
            user_id,
            system_edition_id=system_edition_id,
            company_id=company_id,
            channel_id=channel_id,
            active_only=active_only,
        )
        if active_only:
            now = utc_now()
            grants = [grant for grant in grants if grant.is_valid(now)]
        names: list[RoleName] = []
        for grant in grants:
            if grant.role_name not in names:
                names.append(grant.role_name)
        return names

    async def user_has_role(
        self,
        user_id: str,
        role_name: RoleName | str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
    ) -> bool:
        definition = get_role_definition(role_name)
        roles = await self.get_user_roles(
            user_id,
            system_edition_id=system_edition_id,
            company_id=company_id,
            channel_id=channel_id,
        )
        return definition.name in roles
