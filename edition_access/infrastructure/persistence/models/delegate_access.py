"""DelegateAccess ORM model (soft delete)."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.models.mixins import (
    AuditedModel,
    SoftDeleteMixin,
)


class DelegateAccess(AuditedModel, SoftDeleteMixin, Base):
    """Delegate grant. Table: delegate_access.

    Unique (system_edition_id, delegator_id, delegate_id) among rows that are not deleted.
    permissions is a JSON list of permission values.
    """

    __tablename__ = "delegate_access"

    system_edition_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("system_edition.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    delegator_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    delegate_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expiration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    __table_args__ = (
        Index(
            "uq_delegate_access_pair",
            "system_edition_id",
            "delegator_id",
            "delegate_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
