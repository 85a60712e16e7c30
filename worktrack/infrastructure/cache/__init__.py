"""Cache: Redis CacheService."""

from worktrack.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService"]
