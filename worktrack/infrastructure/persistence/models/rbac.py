"""Role, RolePermission, and UserRole ORM models (RBAC backing data).

Permissions are plain codes from worktrack.domain.enums.Permission; a role
grants a flat set of them. There is no permission table and no hierarchy.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from worktrack.domain.enums import Permission
from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import (
    CuidMixin,
    CompanyMixin,
    MultiCompanyModel,
    values_check,
)


class Role(MultiCompanyModel, Base):
    """Role. Table: role. Unique (company_id, code)."""

    __tablename__ = "role"

    code: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("company_id", "code", name="uq_role_company_code"),
    )


class RolePermission(CuidMixin, CompanyMixin, Base):
    """Permission code granted by a role. Table: role_permission."""

    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    permission: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        UniqueConstraint("role_id", "permission", name="uq_role_permission"),
        Index("ix_role_permission_lookup", "company_id", "role_id"),
        values_check("permission", Permission.values(), "role_permission_code_check"),
    )


class UserRole(CuidMixin, CompanyMixin, Base):
    """Role held by a user within a company. Table: user_role."""

    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(String, nullable=False)
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    assigned_by: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_role"),
        Index("ix_user_role_lookup", "company_id", "user_id"),
    )
