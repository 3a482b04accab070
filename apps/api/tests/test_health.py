"""Tests for Health endpoint."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from ward_api.services import member_service


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "env" in data
    assert "version" in data
    assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_database_error_returns_503(authed_client: AsyncClient, monkeypatch):
    def broken(db, q=None):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr(member_service, "list_members", broken)

    response = await authed_client.get("/members")
    assert response.status_code == 503
    assert response.json()["detail"] == "Database operation failed"
