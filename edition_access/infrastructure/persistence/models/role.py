"""Role and UserRole ORM models (catalog roles and role grants)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.models.mixins import AuditedModel


class Role(AuditedModel, Base):
    """Persisted catalog role. Table: role. Unique name (one row per RoleName)."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_scope: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class UserRole(AuditedModel, Base):
    """Role grant. Table: user_role. Validity (active, revoked, expired) is decided in the domain."""

    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False, index=True
    )
    system_edition_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("system_edition.id", ondelete="CASCADE"), nullable=True
    )
    company_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("company.id", ondelete="CASCADE"), nullable=True
    )
    channel_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("channel.id", ondelete="CASCADE"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    granted_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    revoked_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_user_role_active", "user_id", "is_active", "revoked_at"),
        Index("ix_user_role_edition", "user_id", "system_edition_id", "is_active"),
        Index("ix_user_role_company", "user_id", "company_id", "is_active"),
        Index("ix_user_role_channel", "user_id", "channel_id", "is_active"),
    )
