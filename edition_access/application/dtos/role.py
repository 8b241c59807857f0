"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass

from edition_access.domain.enums import RoleName
from edition_access.domain.value_objects import RoleContext


@dataclass(frozen=True)
class RoleResult:
    """Persisted role row (one per catalog entry, see scripts/seed_roles.py)."""

    id: str
    name: RoleName
    description: str | None
    is_active: bool


@dataclass(frozen=True)
class RoleSwitchResult:
    """Outcome of switching the active role."""

    previous_role: RoleName | None
    new_role: RoleName
    context: RoleContext
