"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
their services from worktrack.api.v1.dependencies.
"""

from fastapi import APIRouter

from worktrack.api.v1.endpoints import health, tasks, transfers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(transfers.router, prefix="/transfers", tags=["transfers"])
