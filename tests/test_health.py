"""Health endpoint tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint returns ok status."""
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_check_ready(client: AsyncClient) -> None:
    """Test readiness check reports the database as reachable."""
    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient) -> None:
    """Test root endpoint returns service info."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Booking Platform API"
    assert "version" in data


@pytest.mark.asyncio
async def test_unknown_route_is_not_found(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.json() == {"status": "fail", "message": "Not Found"}


@pytest.mark.asyncio
async def test_unhandled_errors_are_masked() -> None:
    """Unexpected exceptions surface as a generic 500 envelope."""
    import json

    from starlette.requests import Request

    from app.main import global_exception_handler

    request = Request({"type": "http", "method": "GET", "path": "/boom", "headers": []})
    response = await global_exception_handler(request, RuntimeError("password=hunter2"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"status": "error", "message": "Internal server error"}
