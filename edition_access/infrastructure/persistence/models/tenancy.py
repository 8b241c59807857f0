"""Tenancy ORM models: system editions, companies, channels."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.models.mixins import AuditedModel


class SystemEdition(AuditedModel, Base):
    """Top-level tenant. Table: system_edition. Unique name."""

    __tablename__ = "system_edition"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )


class Company(AuditedModel, Base):
    """Company within one system edition. Table: company."""

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String, nullable=False)
    system_edition_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("system_edition.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )


class Channel(AuditedModel, Base):
    """Sales/distribution channel within a system edition. Table: channel."""

    __tablename__ = "channel"

    name: Mapped[str] = mapped_column(String, nullable=False)
    system_edition_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("system_edition.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
