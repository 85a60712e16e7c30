"""Smoke tests for health and app wiring."""

from fastapi import FastAPI
from httpx import AsyncClient

from worktrack.core.lifespan import create_lifespan
from worktrack.main import create_app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the app version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version") == "1.0.0"


async def test_health_needs_no_credentials(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"Authorization": "Bearer junk"})
    assert response.status_code == 200


async def test_lifespan_without_redis_sets_no_cache() -> None:
    """With REDIS_ENABLED=false the permission cache is absent and startup succeeds."""
    app: FastAPI = create_app()
    async with create_lifespan(app):
        assert app.state.cache is None


def test_routes_are_mounted_under_api_v1() -> None:
    paths = {route.path for route in create_app().routes}
    assert "/api/v1/health" in paths
    assert "/api/v1/tasks/{task_id}/accept" in paths
    assert "/api/v1/transfers/{transfer_id}/respond" in paths
