"""Permission gate: flat role -> permission-set lookup with optional caching."""

from __future__ import annotations

from worktrack.application.interfaces.services import ICacheService, IPermissionResolver
from worktrack.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PERMISSION
from worktrack.domain.enums import Permission
from worktrack.domain.exceptions import AuthorizationException
from worktrack.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _cache_key(company_id: str, user_id: str) -> str:
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{company_id}{CACHE_KEY_SEP}{user_id}"


class PermissionGate:
    """Answers "may this user do X in this company?" before every mutation.

    A permission is granted only by exact membership in the user's set; there
    are no wildcards and no hierarchy. Sets are cached per (company, user)
    when a cache is available.
    """

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl

    async def get_user_permissions(self, user_id: str, company_id: str) -> set[str]:
        """Return the user's permission codes in the company. Uses cache if available."""
        key = _cache_key(company_id, user_id)
        if self.cache and self.cache.is_available():
            cached = await self.cache.get(key)
            if cached is not None:
                return set(cached)

        permissions = await self.permission_resolver.get_user_permissions(
            user_id, company_id
        )
        if self.cache and self.cache.is_available():
            await self.cache.set(key, sorted(permissions), ttl=self.cache_ttl)
        return permissions

    async def has_permission(
        self, user_id: str, company_id: str, permission: Permission
    ) -> bool:
        permissions = await self.get_user_permissions(user_id, company_id)
        return permission.value in permissions

    async def require_permission(
        self,
        user_id: str,
        company_id: str,
        permission: Permission,
        resource: str = "task",
    ) -> None:
        """Raise AuthorizationException if the user lacks the permission."""
        if not await self.has_permission(user_id, company_id, permission):
            logger.info(
                "Permission denied: user=%s company=%s permission=%s",
                user_id,
                company_id,
                permission.value,
            )
            raise AuthorizationException(resource=resource, action=permission.value)

    async def invalidate_user_cache(self, user_id: str, company_id: str) -> None:
        """Invalidate cached permissions for one user (after role changes)."""
        if self.cache and self.cache.is_available():
            await self.cache.delete(_cache_key(company_id, user_id))

    async def invalidate_company_cache(self, company_id: str) -> None:
        """Invalidate all cached permissions for a company."""
        if self.cache and self.cache.is_available():
            await self.cache.delete_pattern(_cache_key(company_id, "*"))
