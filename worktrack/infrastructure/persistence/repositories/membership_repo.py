"""Membership lookups: the eligibility oracle over company/department members."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.domain.enums import MembershipScope
from worktrack.infrastructure.persistence.models.company import (
    CompanyMember,
    Department,
    DepartmentMember,
)


class MembershipRepository:
    """Read-only membership queries. Implements IMembershipOracle."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def is_active_member(
        self, scope: MembershipScope, scope_id: str, user_id: str
    ) -> bool:
        """True if the user has an active membership row in the department or company."""
        if scope == MembershipScope.DEPARTMENT:
            query = select(DepartmentMember.id).where(
                DepartmentMember.department_id == scope_id,
                DepartmentMember.user_id == user_id,
                DepartmentMember.is_active.is_(True),
            )
        else:
            query = select(CompanyMember.id).where(
                CompanyMember.company_id == scope_id,
                CompanyMember.user_id == user_id,
                CompanyMember.is_active.is_(True),
            )
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def department_in_company(self, company_id: str, department_id: str) -> bool:
        result = await self.db.execute(
            select(Department.id).where(
                Department.id == department_id,
                Department.company_id == company_id,
            )
        )
        return result.scalar_one_or_none() is not None
