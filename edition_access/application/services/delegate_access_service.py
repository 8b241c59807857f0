"""Delegate access grants: create, update, deactivate, delete, and list."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from edition_access.application.interfaces.repositories import (
    IDelegateAccessRepository,
    IUserRepository,
)
from edition_access.domain.entities import DelegateAccessEntity
from edition_access.domain.enums import Permission
from edition_access.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
    SelfDelegationException,
    ValidationException,
)
from edition_access.domain.value_objects import FilterSpec
from edition_access.shared.telemetry import get_logger
from edition_access.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


def _to_permissions(permissions: Iterable[Permission | str]) -> frozenset[Permission]:
    try:
        return frozenset(Permission(p) for p in permissions)
    except ValueError as e:
        raise ValidationException(str(e), field="permissions") from None


class DelegateAccessService:
    """Manage delegate grants. Checking a grant is PermissionEvaluator.check_delegate_access."""

    def __init__(
        self,
        delegate_repo: IDelegateAccessRepository,
        user_repo: IUserRepository,
    ) -> None:
        self._delegate_repo = delegate_repo
        self._user_repo = user_repo

    async def create_grant(
        self,
        system_edition_id: str,
        delegator_id: str,
        delegate_id: str,
        permissions: Iterable[Permission | str],
        expiration_date: datetime | None = None,
    ) -> DelegateAccessEntity:
        """Create a delegate grant.

        Raises:
            SelfDelegationException: If delegator and delegate are the same user.
            ValidationException: If a permission token is unknown or the edition
                is not the delegator's.
            ResourceNotFoundException: If either user does not exist.
            DuplicateAssignmentException: If a grant exists for this edition and pair.
        """
        if delegator_id == delegate_id:
            raise SelfDelegationException(delegator_id)
        granted = _to_permissions(permissions)
        delegator = await self._user_repo.get_by_id(delegator_id)
        if delegator is None:
            raise ResourceNotFoundException("user", delegator_id)
        if await self._user_repo.get_by_id(delegate_id) is None:
            raise ResourceNotFoundException("user", delegate_id)
        if delegator.system_edition_id != system_edition_id:
            raise ValidationException(
                "Delegate access edition must match the delegator's system edition",
                field="system_edition_id",
            )
        if await self._delegate_repo.exists(system_edition_id, delegator_id, delegate_id):
            raise DuplicateAssignmentException(
                "Delegate access already exists for this delegator and delegate",
                assignment_type="delegate_access",
                details_extra={"delegator_id": delegator_id, "delegate_id": delegate_id},
            )
        grant = DelegateAccessEntity(
            id=generate_cuid(),
            system_edition_id=system_edition_id,
            delegator_id=delegator_id,
            delegate_id=delegate_id,
            permissions=granted,
            expiration_date=expiration_date,
        )
        created = await self._delegate_repo.create_grant(grant)
        logger.info(
            "Created delegate access %s: %s acts for %s", created.id, delegate_id, delegator_id
        )
        return created

    async def get_grant(self, grant_id: str) -> DelegateAccessEntity:
        grant = await self._delegate_repo.get_by_id(grant_id)
        if grant is None:
            raise ResourceNotFoundException("delegate_access", grant_id)
        return grant

    async def update_grant(
        self,
        grant_id: str,
        permissions: Iterable[Permission | str] | None = None,
        expiration_date: datetime | None = None,
        is_active: bool | None = None,
    ) -> DelegateAccessEntity:
        """Update only the fields given; None leaves a field unchanged."""
        grant = await self.get_grant(grant_id)
        if permissions is not None:
            grant.permissions = _to_permissions(permissions)
        if expiration_date is not None:
            grant.expiration_date = expiration_date
        if is_active is not None:
            grant.is_active = is_active
        saved = await self._delegate_repo.save(grant)
        logger.info("Updated delegate access %s", grant_id)
        return saved

    async def deactivate_grant(self, grant_id: str) -> DelegateAccessEntity:
        return await self.update_grant(grant_id, is_active=False)

    async def delete_grant(self, grant_id: str) -> None:
        """Soft delete the grant.

        Raises:
            ResourceNotFoundException: If the grant does not exist.
        """
        if not await self._delegate_repo.soft_delete(grant_id):
            raise ResourceNotFoundException("delegate_access", grant_id)
        logger.info("Deleted delegate access %s", grant_id)

    async def list_grants(
        self, spec: FilterSpec, skip: int = 0, limit: int = 100
    ) -> list[DelegateAccessEntity]:
        return await self._delegate_repo.list_grants(spec, skip=skip, limit=limit)
