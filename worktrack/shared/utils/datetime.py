"""
UTC datetime utilities for consistent timezone handling.

All persisted timestamps (task updates, timer starts, transfer responses,
history entries) are timezone-aware UTC. Use these helpers instead of
datetime.now() or datetime.utcnow().
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Services accept a Clock (defaulting to this function) so tests can pin
    or advance time deterministically.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository boundaries: some drivers (e.g. SQLite) return naive
    datetimes even for DateTime(timezone=True) columns.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
