"""Delegate access domain entity.

One user (delegate) exercising an exact permission subset on behalf of
another (delegator), independent of role grants.
"""

from dataclasses import dataclass, field
from datetime import datetime

from edition_access.domain.enums import Permission
from edition_access.domain.exceptions import SelfDelegationException, ValidationException
from edition_access.shared.utils.datetime import ensure_utc, utc_now


@dataclass
class DelegateAccessEntity:
    """Domain entity for a delegate access grant (table delegate_access)."""

    id: str
    system_edition_id: str
    delegator_id: str
    delegate_id: str
    permissions: frozenset[Permission] = field(default_factory=frozenset)
    is_active: bool = True
    expiration_date: datetime | None = None

    def __post_init__(self) -> None:
        self.permissions = frozenset(Permission(p) for p in self.permissions)
        self.validate()

    def validate(self) -> None:
        """Validate grant rules. Raises SelfDelegationException or ValidationException."""
        if not self.system_edition_id:
            raise ValidationException(
                "Delegate access requires a system edition", field="system_edition_id"
            )
        if self.delegator_id == self.delegate_id:
            raise SelfDelegationException(self.delegator_id)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once now is past expiration_date."""
        if self.expiration_date is None:
            return False
        return (now or utc_now()) > ensure_utc(self.expiration_date)

    def allows(self, permission: Permission) -> bool:
        """Exact membership; no hierarchy between permissions."""
        return permission in self.permissions

    def is_usable(self, now: datetime | None = None) -> bool:
        return self.is_active and not self.is_expired(now)
