"""Infrastructure services: permission resolution and RBAC seeding."""

from worktrack.infrastructure.services.company_rbac_seeder import (
    DEFAULT_ROLES,
    CompanyRbacSeeder,
)
from worktrack.infrastructure.services.permission_resolver import PermissionResolver

__all__ = ["CompanyRbacSeeder", "DEFAULT_ROLES", "PermissionResolver"]
