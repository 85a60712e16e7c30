"""Core: config, constants, and application bootstrap."""

from worktrack.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
