"""Integration tests: Health and root endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from registrar.main import app


@pytest.mark.asyncio
async def test_health():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"


@pytest.mark.asyncio
async def test_root_sets_request_headers():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in resp.headers
    assert "Cache-Control" not in resp.headers


@pytest.mark.asyncio
async def test_oversized_request_id_is_replaced():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/", headers={"X-Request-ID": "x" * 200})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] != "x" * 200
    assert len(resp.headers["X-Request-ID"]) == 36


@pytest.mark.asyncio
async def test_api_responses_are_not_cacheable(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/courses")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"

    resp = await async_client.post(
        f"{api_base}/student-numbers",
        json={"course_id": 101, "school_year": "2024-2025"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.headers["Cache-Control"] == "no-store"
    assert resp.headers["X-Request-ID"]
