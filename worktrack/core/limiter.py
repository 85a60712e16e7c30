"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from worktrack.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    return get_settings().rate_limit_writes


# Resolved per request so RATE_LIMIT_WRITES is read after settings load.
limit_writes = limiter.limit(_write_limit)
