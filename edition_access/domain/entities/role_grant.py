"""Role grant domain entity.

A time-bounded assignment of a catalog role to a user within an optional
(system edition, company, channel) context. The engine, not storage, decides
whether a stored grant is usable.
"""

from dataclasses import dataclass
from datetime import datetime

from edition_access.domain.enums import RoleName
from edition_access.domain.exceptions import ValidationException
from edition_access.shared.utils.datetime import ensure_utc, utc_now


@dataclass
class RoleGrantEntity:
    """Domain entity for a user role grant (table user_role).

    Invariant: revoked_at set implies is_active is False. Expiry is derived
    from expires_at and never written.
    """

    id: str
    user_id: str
    role_id: str
    role_name: RoleName
    granted_at: datetime
    system_edition_id: str | None = None
    company_id: str | None = None
    channel_id: str | None = None
    is_active: bool = True
    granted_by: str | None = None
    expires_at: datetime | None = None
    revoked_at: datetime | None = None
    revoked_by: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate grant rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Role grant ID is required", field="id")
        if not self.user_id:
            raise ValidationException("Role grant user is required", field="user_id")
        if self.revoked_at is not None and self.is_active:
            raise ValidationException(
                "A revoked role grant cannot be active", field="is_active"
            )

    @property
    def has_context(self) -> bool:
        """Return True if the grant names an edition, company, or channel."""
        return bool(self.system_edition_id or self.company_id or self.channel_id)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once now is past expires_at (never for grants without expiry)."""
        if self.expires_at is None:
            return False
        return (now or utc_now()) > ensure_utc(self.expires_at)

    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_valid(self, now: datetime | None = None) -> bool:
        """Return True if the grant may serve as an active role."""
        return self.is_active and not self.is_expired(now) and not self.is_revoked()

    def revoke(self, revoked_by: str | None, now: datetime | None = None) -> None:
        """Revoke the grant. Re-revoking keeps the first revocation metadata.

        Args:
            revoked_by: User id performing the revocation.
            now: Revocation time; defaults to the current UTC time.
        """
        if self.is_revoked():
            return
        self.revoked_at = now or utc_now()
        self.revoked_by = revoked_by
        self.is_active = False

    def reactivate(self) -> None:
        """Clear revocation and mark active. Expiry is left untouched."""
        self.revoked_at = None
        self.revoked_by = None
        self.is_active = True
