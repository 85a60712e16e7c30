"""Shared utilities: telemetry (logging) and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from worktrack.shared.utils import Clock, ensure_utc, generate_cuid, utc_now

__all__ = [
    "Clock",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
