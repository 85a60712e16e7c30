"""Elapsed-time arithmetic for task timers."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

_SECONDS_PER_MINUTE = Decimal(60)


def elapsed_minutes(started_at: datetime, ended_at: datetime) -> int:
    """Whole minutes between two instants, rounded half up.

    90 seconds -> 2, 29 seconds -> 0, 30 seconds -> 1. A negative interval
    (clock skew between writers) clamps to 0.
    """
    seconds = Decimal(str((ended_at - started_at).total_seconds()))
    if seconds <= 0:
        return 0
    minutes = (seconds / _SECONDS_PER_MINUTE).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return int(minutes)
