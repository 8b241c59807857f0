"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs, domain entities, or value objects only;
no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from edition_access.application.dtos.company import ChannelResult, CompanyResult
    from edition_access.application.dtos.role import RoleResult
    from edition_access.application.dtos.user import UserResult
    from edition_access.domain.entities import DelegateAccessEntity, RoleGrantEntity
    from edition_access.domain.enums import RoleName
    from edition_access.domain.value_objects import FilterSpec


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def set_active_user_role(self, user_id: str, grant_id: str | None) -> None:
        """Write the active role pointer (None clears it). Last write wins."""

    async def list_users(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        """Return users matching the scope filter with pagination."""


# Company repository interface
class ICompanyRepository(Protocol):
    """Protocol for company repository (DIP)."""

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        """Return company by ID."""

    async def list_companies(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[CompanyResult]:
        """Return companies matching the scope filter with pagination."""


# Channel repository interface
class IChannelRepository(Protocol):
    """Protocol for channel lookups (DIP)."""

    async def get_by_id(self, channel_id: str) -> ChannelResult | None:
        """Return channel by ID."""


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for persisted role rows (DIP)."""

    async def get_by_name(self, name: RoleName) -> RoleResult | None:
        """Return role row for a catalog role name."""

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        """Return role row by ID."""


# Role grant repository interface
class IRoleGrantRepository(Protocol):
    """Protocol for role grant (user_role) repository (DIP)."""

    async def get_by_id(self, grant_id: str) -> RoleGrantEntity | None:
        """Return role grant by ID (any state)."""

    async def list_for_user(
        self,
        user_id: str,
        system_edition_id: str | None = None,
        company_id: str | None = None,
        channel_id: str | None = None,
        active_only: bool = False,
    ) -> list[RoleGrantEntity]:
        """Return grants for user, optionally narrowed to a context and to is_active rows."""

    async def find_existing(
        self,
        user_id: str,
        role_id: str,
        system_edition_id: str | None,
        company_id: str | None,
        channel_id: str | None,
    ) -> RoleGrantEntity | None:
        """Return the grant for this exact (user, role, context) tuple, if any."""

    async def create_grant(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        """Persist a new grant."""

    async def save(self, grant: RoleGrantEntity) -> RoleGrantEntity:
        """Persist lifecycle changes (revoke, reactivate) on an existing grant."""


# Delegate access repository interface
class IDelegateAccessRepository(Protocol):
    """Protocol for delegate access repository (DIP). Soft-deleted rows are never returned."""

    async def find_active_grant(
        self, delegate_id: str, delegator_id: str
    ) -> DelegateAccessEntity | None:
        """Return the is_active grant letting delegate act for delegator (expiry not filtered)."""

    async def get_by_id(self, grant_id: str) -> DelegateAccessEntity | None:
        """Return grant by ID."""

    async def exists(
        self, system_edition_id: str, delegator_id: str, delegate_id: str
    ) -> bool:
        """Return True if a grant already exists for this edition and pair."""

    async def create_grant(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        """Persist a new grant."""

    async def save(self, grant: DelegateAccessEntity) -> DelegateAccessEntity:
        """Persist changes to permissions, expiry, or is_active."""

    async def soft_delete(self, grant_id: str) -> bool:
        """Mark grant deleted. Return False if it was not found."""

    async def list_grants(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[DelegateAccessEntity]:
        """Return grants matching the scope filter with pagination."""
