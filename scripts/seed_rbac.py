"""Seed default roles (admin, manager, member) for an existing company.

Usage:
    python -m scripts.seed_rbac <company_id> [<user_id>:<role_code> ...]

Optional user:role pairs are assigned after seeding. Requires DATABASE_URL.
With REDIS_ENABLED, cached permission sets of the company are invalidated.
"""

import asyncio
import sys

from sqlalchemy import select

from worktrack.application.services.permission_gate import PermissionGate
from worktrack.core.config import get_settings
from worktrack.infrastructure.cache.redis_cache import CacheService
from worktrack.infrastructure.persistence import database
from worktrack.infrastructure.persistence.models import Company
from worktrack.infrastructure.services import CompanyRbacSeeder, PermissionResolver


async def main() -> None:
    """Seed roles for the given company and apply optional assignments."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.seed_rbac <company_id> [<user_id>:<role_code> ...]",
            file=sys.stderr,
        )
        sys.exit(1)
    company_id = sys.argv[1]
    assignments = [arg.split(":", 1) for arg in sys.argv[2:]]
    if any(len(pair) != 2 for pair in assignments):
        print("Assignments must look like <user_id>:<role_code>", file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    cache: CacheService | None = None
    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            found = await session.execute(
                select(Company.id).where(Company.id == company_id)
            )
            if found.scalar_one_or_none() is None:
                print(f"Company not found: {company_id}", file=sys.stderr)
                sys.exit(1)
            gate = PermissionGate(
                PermissionResolver(session),
                cache=cache,
                cache_ttl=settings.cache_ttl_permissions,
            )
            seeder = CompanyRbacSeeder(session, permission_gate=gate)
            roles = await seeder.seed_default_roles(company_id)
            for user_id, role_code in assignments:
                await seeder.assign_role(company_id, user_id, role_code)
            print(f"Seeded roles for company {company_id}: {', '.join(sorted(roles))}")
    if cache is not None:
        await cache.disconnect()
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
