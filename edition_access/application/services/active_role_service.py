"""Active-role selector: which role grant a user is currently acting as.

The pointer lives on the user row (active_user_role_id). Validation is
self-healing: a pointer to a grant that is missing, foreign, inactive,
revoked, or expired is cleared on read.
"""

from __future__ import annotations

from edition_access.application.dtos.role import RoleSwitchResult
from edition_access.application.dtos.user import UserResult
from edition_access.application.interfaces.repositories import (
    IRoleGrantRepository,
    IUserRepository,
)
from edition_access.domain.entities import RoleGrantEntity
from edition_access.domain.exceptions import (
    ActiveRoleRequiredException,
    InvalidRoleGrantException,
    ResourceNotFoundException,
)
from edition_access.domain.value_objects import (
    ActiveRole,
    NoActiveRole,
    RoleContext,
    active_role_state,
)
from edition_access.shared.telemetry import get_logger
from edition_access.shared.utils.datetime import utc_now

logger = get_logger(__name__)

INVALID_ACTIVE_ROLE_MESSAGE = "Active role is invalid or expired. Please select a new role."
NO_ACTIVE_ROLE_MESSAGE = "No active role selected. Please select a role to continue."


class ActiveRoleService:
    """Select, validate, and resolve the active role grant for a user."""

    def __init__(
        self,
        user_repo: IUserRepository,
        role_grant_repo: IRoleGrantRepository,
    ) -> None:
        self.user_repo = user_repo
        self.role_grant_repo = role_grant_repo

    async def _get_user(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    def _grant_problem(self, user_id: str, grant: RoleGrantEntity | None) -> str | None:
        """Return why grant cannot be the user's active role, or None if it can."""
        if grant is None:
            return "Role grant not found"
        if grant.user_id != user_id:
            return "Role grant does not belong to this user"
        if grant.is_revoked():
            return "Role grant has been revoked"
        if not grant.is_active:
            return "Role grant is not active"
        if grant.is_expired(utc_now()):
            return "Role grant has expired"
        return None

    async def set_active_role(self, user_id: str, grant_id: str) -> RoleGrantEntity:
        """Point the user's active role at grant_id.

        Raises:
            ResourceNotFoundException: If the user does not exist.
            InvalidRoleGrantException: If the grant is missing, foreign, or not valid now.
        """
        await self._get_user(user_id)
        grant = await self.role_grant_repo.get_by_id(grant_id)
        problem = self._grant_problem(user_id, grant)
        if problem is not None:
            raise InvalidRoleGrantException(grant_id, problem)
        await self.user_repo.set_active_user_role(user_id, grant_id)
        logger.info("User %s activated role grant %s (%s)", user_id, grant_id, grant.role_name.value)
        return grant

    async def clear_active_role(self, user_id: str) -> None:
        await self.user_repo.set_active_user_role(user_id, None)

    async def _validate(self, user: UserResult) -> RoleGrantEntity | None:
        """Return the usable active grant, clearing the pointer when it is not usable."""
        state = active_role_state(user.active_user_role_id)
        if isinstance(state, NoActiveRole):
            return None
        grant = await self.role_grant_repo.get_by_id(state.grant_id)
        problem = self._grant_problem(user.id, grant)
        if problem is None:
            return grant
        await self.user_repo.set_active_user_role(user.id, None)
        logger.warning(
            "Cleared active role grant %s for user %s: %s",
            state.grant_id,
            user.id,
            problem,
        )
        return None

    async def validate_active_role(self, user_id: str) -> bool:
        """Return True if the active role grant is usable; clear the pointer when it is not.

        No active role returns False without writing.
        """
        grant = await self._validate(await self._get_user(user_id))
        return grant is not None

    async def get_active_role(self, user_id: str) -> RoleGrantEntity | None:
        """Return the grant the pointer names (without validating it), or None."""
        state = active_role_state((await self._get_user(user_id)).active_user_role_id)
        if isinstance(state, NoActiveRole):
            return None
        return await self.role_grant_repo.get_by_id(state.grant_id)

    async def has_active_role(self, user_id: str) -> bool:
        user = await self._get_user(user_id)
        return isinstance(active_role_state(user.active_user_role_id), ActiveRole)

    async def get_current_context(self, user_id: str) -> RoleContext:
        """Return the context of the active grant; empty when none is active."""
        grant = await self.get_active_role(user_id)
        if grant is None:
            return RoleContext()
        return self._context_for(grant)

    @staticmethod
    def _context_for(grant: RoleGrantEntity) -> RoleContext:
        return RoleContext(
            role_grant_id=grant.id,
            role_id=grant.role_id,
            role_name=grant.role_name,
            system_edition_id=grant.system_edition_id,
            company_id=grant.company_id,
            channel_id=grant.channel_id,
        )

    async def get_available_roles(self, user_id: str) -> list[RoleGrantEntity]:
        """Return the user's grants that are active, unrevoked, and unexpired."""
        now = utc_now()
        grants = await self.role_grant_repo.list_for_user(user_id, active_only=True)
        return [grant for grant in grants if grant.is_valid(now)]

    async def switch_role(self, user_id: str, grant_id: str) -> RoleSwitchResult:
        """Switch to one of the user's available grants.

        Raises:
            ResourceNotFoundException: If grant_id is not among the available roles.
        """
        previous = await self.get_active_role(user_id)
        available = await self.get_available_roles(user_id)
        if not any(grant.id == grant_id for grant in available):
            raise ResourceNotFoundException("role_grant", grant_id)
        grant = await self.set_active_role(user_id, grant_id)
        return RoleSwitchResult(
            previous_role=previous.role_name if previous else None,
            new_role=grant.role_name,
            context=self._context_for(grant),
        )

    async def resolve_context(self, user_id: str) -> RoleContext:
        """Validate the active role and return its context for request handling.

        Raises:
            ActiveRoleRequiredException: If the pointer was just cleared or none is set.
        """
        user = await self._get_user(user_id)
        grant = await self._validate(user)
        if grant is None:
            if user.active_user_role_id:
                raise ActiveRoleRequiredException(INVALID_ACTIVE_ROLE_MESSAGE, cleared=True)
            raise ActiveRoleRequiredException(NO_ACTIVE_ROLE_MESSAGE)
        return self._context_for(grant)
