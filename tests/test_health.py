"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_ready_when_store_and_cache_answer(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "store": "ok", "cache": "ok"}


async def test_ready_with_cache_down_is_still_ready(client: AsyncClient, cache) -> None:
    """The cache is optional; its outage is reported but does not fail readiness."""
    cache.fail = True
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["cache"] == "unavailable"


async def test_not_ready_when_store_down(client: AsyncClient, store) -> None:
    store.healthy = False
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["store"] == "unavailable"
