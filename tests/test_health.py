"""Tests for health, readiness and liveness endpoints."""

import pytest
from httpx import AsyncClient

from app import main


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["env"] == "test"
    assert "version" in data

    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

    response = await client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_reports_database_outage(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(main, "_database_ok", lambda: False)

    response = await client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "error"

    response = await client.get("/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready"}

    # Liveness never touches the database
    response = await client.get("/live")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_responses_carry_request_id(client: AsyncClient):
    response = await client.get("/live", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = await client.get("/live")
    assert generated.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/nope")
    assert response.status_code == 404
    assert "error" in response.json()
