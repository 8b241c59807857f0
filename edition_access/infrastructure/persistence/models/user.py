"""User ORM model (table app_user)."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from edition_access.infrastructure.persistence.database import Base
from edition_access.infrastructure.persistence.models.mixins import AuditedModel


class User(AuditedModel, Base):
    """User model. Table: app_user. Unique email.

    active_user_role_id points at a user_role row; the FK is created after
    user_role (use_alter) because user_role references app_user.
    """

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    system_edition_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("system_edition.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    company_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("company.id", ondelete="SET NULL"), nullable=True, index=True
    )
    active_user_role_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey(
            "user_role.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_app_user_active_user_role",
        ),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )
