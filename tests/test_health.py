"""Health endpoint smoke test."""

import pytest
from httpx import ASGITransport, AsyncClient

from tourdesk.main import app


@pytest.mark.asyncio
async def test_healthcheck_returns_ok(reset_database) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "Tour Desk API"
    assert payload["database"] == "ok"
    assert payload["run_locks"] == "local"
    assert response.headers.get("x-request-id")
