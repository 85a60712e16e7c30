"""API v1: routes and dependencies."""

from worktrack.api.v1.router import api_router

__all__ = ["api_router"]
