"""Tests for health, metrics, lifespan and the error envelope."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient

from src.taskhub.main import create_app

pytestmark = pytest.mark.integration


class TestHealth:
    async def test_healthy(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "ok",
            "status": "ok",
            "database": "connected",
        }

    async def test_unhealthy_when_database_down(
        self, client: AsyncClient, database, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(database, "ping", AsyncMock(side_effect=OSError("connection refused")))

        response = await client.get("/api/health")

        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "db unreachable"
        assert (body["status"], body["database"]) == ("unhealthy", "disconnected")

    async def test_metrics_exposed(self, client: AsyncClient):
        await client.get("/api/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_request" in response.text


class TestErrorEnvelope:
    async def test_unknown_route_has_request_id(self, client: AsyncClient):
        response = await client.get("/api/nonexistent-endpoint")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["request_id"]
        assert response.headers["X-Request-ID"] == body["request_id"]

    async def test_incoming_request_id_is_propagated(self, client: AsyncClient):
        request_id = "8f14e45f-ceea-467f-a0e6-b2a2d4f0c1a3"

        response = await client.get(
            "/api/auth/me", headers={"X-Request-ID": request_id}
        )

        assert response.status_code == 401
        assert response.json()["request_id"] == request_id

    async def test_different_requests_have_different_ids(self, client: AsyncClient):
        first = await client.get("/api/nonexistent-endpoint")
        second = await client.get("/api/nonexistent-endpoint")

        assert first.json()["request_id"] != second.json()["request_id"]

    async def test_validation_errors_are_listed(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"password": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert body["data"]["errors"][0]["field"] == "email"

    async def test_malformed_path_id_is_400(self, client: AsyncClient, tenant_admin):
        response = await client.get("/api/projects/not-a-uuid", headers=tenant_admin.headers)

        assert response.status_code == 400


class TestLifespan:
    @pytest.fixture
    def lifespan_client(self) -> Generator[TestClient]:
        """Full application with its lifespan: the Database is built from settings."""
        with TestClient(create_app()) as c:
            yield c

    def test_startup_creates_database(self, lifespan_client: TestClient):
        assert lifespan_client.app.state.db is not None

        response = lifespan_client.get("/api/health")

        assert response.status_code == 200
