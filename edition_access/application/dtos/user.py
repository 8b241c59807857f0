"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model. Membership ids are None when not assigned."""

    id: str
    email: str
    system_edition_id: str | None
    company_id: str | None
    active_user_role_id: str | None
    is_active: bool = True
