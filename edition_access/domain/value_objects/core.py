"""Value objects for permission decisions and role context.

Immutable, constructed fresh per request, never persisted.
"""

from dataclasses import dataclass

from edition_access.domain.enums import RoleName


@dataclass(frozen=True)
class PermissionContext:
    """Who is asking (user and active role) and what they target.

    Any combination of target ids may be set; every one present must pass
    its scope boundary check.
    """

    user_id: str
    user_role: RoleName
    company_id: str | None = None
    system_edition_id: str | None = None
    target_user_id: str | None = None
    target_company_id: str | None = None
    target_system_edition_id: str | None = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("PermissionContext requires a user_id")


@dataclass(frozen=True)
class PermissionResult:
    """Outcome of a permission check. A denial always carries a reason."""

    granted: bool
    reason: str | None = None

    @classmethod
    def grant(cls) -> "PermissionResult":
        return cls(granted=True)

    @classmethod
    def deny(cls, reason: str) -> "PermissionResult":
        return cls(granted=False, reason=reason)


@dataclass(frozen=True)
class RoleContext:
    """Context derived from the active role grant (all None when no role is active)."""

    role_grant_id: str | None = None
    role_id: str | None = None
    role_name: RoleName | None = None
    system_edition_id: str | None = None
    company_id: str | None = None
    channel_id: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when no active role backs this context."""
        return self.role_name is None


@dataclass(frozen=True)
class NoActiveRole:
    """The user has not selected an active role."""


@dataclass(frozen=True)
class ActiveRole:
    """The user acts as the role grant grant_id."""

    grant_id: str

    def __post_init__(self) -> None:
        if not self.grant_id:
            raise ValueError("ActiveRole requires a grant_id")


ActiveRoleState = NoActiveRole | ActiveRole


def active_role_state(active_user_role_id: str | None) -> ActiveRoleState:
    """Map the stored pointer (User.active_user_role_id) to its explicit state."""
    if active_user_role_id:
        return ActiveRole(active_user_role_id)
    return NoActiveRole()
