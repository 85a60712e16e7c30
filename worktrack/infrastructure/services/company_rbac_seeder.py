"""Company RBAC seeding: default roles, their permissions, and role assignment."""

from __future__ import annotations

from typing import TypedDict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.services.permission_gate import PermissionGate
from worktrack.domain.enums import Permission
from worktrack.domain.exceptions import ResourceNotFoundException
from worktrack.infrastructure.persistence.models.rbac import (
    Role,
    RolePermission,
    UserRole,
)
from worktrack.shared.utils.datetime import utc_now
from worktrack.shared.utils.generators import generate_cuid


class RoleData(TypedDict):
    """Role configuration for default roles."""

    name: str
    description: str
    permissions: list[Permission]
    is_system: bool


DEFAULT_ROLES: dict[str, RoleData] = {
    "admin": {
        "name": "Administrator",
        "description": "Full access to every task operation",
        "permissions": list(Permission),
        "is_system": True,
    },
    "manager": {
        "name": "Manager",
        "description": "Creates, assigns and edits department and company tasks",
        "permissions": [
            Permission.VIEW_ALL_TASKS,
            Permission.CREATE_PERSONAL_TASKS,
            Permission.CREATE_DEPARTMENT_TASKS,
            Permission.CREATE_COMPANY_TASKS,
            Permission.EDIT_TASKS,
            Permission.ASSIGN_TASKS,
            Permission.ACCEPT_PUBLIC_TASKS,
        ],
        "is_system": True,
    },
    "member": {
        "name": "Member",
        "description": "Works on own tasks and claims public ones",
        "permissions": [
            Permission.CREATE_PERSONAL_TASKS,
            Permission.EDIT_TASKS,
            Permission.ACCEPT_PUBLIC_TASKS,
        ],
        "is_system": True,
    },
}


class CompanyRbacSeeder:
    """Creates the default roles for a company and assigns them to users.

    When a permission gate is given, cached permission sets affected by a
    write are invalidated after it, so the gate does not answer from a stale
    set for the rest of the cache TTL.
    """

    def __init__(
        self, db: AsyncSession, permission_gate: PermissionGate | None = None
    ) -> None:
        self.db = db
        self.permission_gate = permission_gate

    async def seed_default_roles(self, company_id: str) -> dict[str, str]:
        """Create DEFAULT_ROLES for the company. Returns {role_code: role_id}.

        Idempotent: roles that already exist are left untouched.
        """
        result = await self.db.execute(
            select(Role.code, Role.id).where(Role.company_id == company_id)
        )
        role_map: dict[str, str] = {code: role_id for code, role_id in result.all()}

        roles: list[Role] = []
        grants: list[RolePermission] = []
        for code, data in DEFAULT_ROLES.items():
            if code in role_map:
                continue
            role_id = generate_cuid()
            roles.append(
                Role(
                    id=role_id,
                    company_id=company_id,
                    code=code,
                    name=data["name"],
                    description=data["description"],
                    is_system=data["is_system"],
                    is_active=True,
                )
            )
            grants.extend(
                RolePermission(
                    company_id=company_id,
                    role_id=role_id,
                    permission=Permission(p).value,
                )
                for p in data["permissions"]
            )
            role_map[code] = role_id

        if roles:
            self.db.add_all(roles)
            await self.db.flush()
            self.db.add_all(grants)
            await self.db.flush()
            if self.permission_gate is not None:
                await self.permission_gate.invalidate_company_cache(company_id)
        return role_map

    async def assign_role(
        self,
        company_id: str,
        user_id: str,
        role_code: str,
        assigned_by: str | None = None,
    ) -> None:
        """Give user_id the role with role_code in the company.

        Raises:
            ResourceNotFoundException: the company has no such role.
        """
        result = await self.db.execute(
            select(Role.id).where(Role.company_id == company_id, Role.code == role_code)
        )
        role_id = result.scalar_one_or_none()
        if role_id is None:
            raise ResourceNotFoundException("role", role_code)
        existing = await self.db.execute(
            select(UserRole.id).where(
                UserRole.user_id == user_id, UserRole.role_id == role_id
            )
        )
        if existing.scalar_one_or_none() is not None:
            return
        self.db.add(
            UserRole(
                company_id=company_id,
                user_id=user_id,
                role_id=role_id,
                assigned_by=assigned_by,
                assigned_at=utc_now(),
            )
        )
        await self.db.flush()
        if self.permission_gate is not None:
            await self.permission_gate.invalidate_user_cache(user_id, company_id)
