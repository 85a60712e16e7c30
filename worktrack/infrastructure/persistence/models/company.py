"""Company, Department and membership ORM models.

Backing data for the eligibility oracle. Administered outside this service;
the task core only reads membership rows.
"""

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiCompanyModel,
    TimestampMixin,
)


class Company(CuidMixin, TimestampMixin, Base):
    """Root tenant entity. Table: company."""

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Department(MultiCompanyModel, Base):
    """Department inside a company. Table: department."""

    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "name", name="uq_department_company_name"),
    )


class CompanyMember(MultiCompanyModel, Base):
    """User membership in a company. Table: company_member."""

    __tablename__ = "company_member"

    user_id: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("company_id", "user_id", name="uq_company_member"),
        Index("ix_company_member_user", "user_id", "company_id"),
    )


class DepartmentMember(CuidMixin, TimestampMixin, Base):
    """User membership in a department. Table: department_member."""

    __tablename__ = "department_member"

    department_id: Mapped[str] = mapped_column(
        String, ForeignKey("department.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("department_id", "user_id", name="uq_department_member"),
        Index("ix_department_member_user", "user_id", "department_id"),
    )
