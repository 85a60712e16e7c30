"""Resolves user permissions from DB (implements IPermissionResolver)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.infrastructure.persistence.models.rbac import (
    Role,
    RolePermission,
    UserRole,
)


class PermissionResolver:
    """Resolves user permissions by querying user roles and role permissions."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_permissions(self, user_id: str, company_id: str) -> set[str]:
        """Return the permission codes granted to the user in the company (active roles only)."""
        query = (
            select(RolePermission.permission)
            .select_from(UserRole)
            .join(RolePermission, RolePermission.role_id == UserRole.role_id)
            .join(Role, Role.id == UserRole.role_id)
            .where(
                UserRole.user_id == user_id,
                UserRole.company_id == company_id,
                Role.company_id == company_id,
                Role.is_active.is_(True),
            )
        )
        result = await self.db.execute(query)
        return {row[0] for row in result.fetchall()}
