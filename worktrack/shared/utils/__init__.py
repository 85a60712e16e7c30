"""Shared utilities: datetime and identifier generators."""

from worktrack.shared.utils.datetime import Clock, ensure_utc, utc_now
from worktrack.shared.utils.generators import generate_cuid

__all__ = [
    "Clock",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
