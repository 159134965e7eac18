"""API tests for the bearer token guard."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from stockflow.api.dependencies import get_app_settings
from stockflow.config import Settings
from stockflow.config.settings import AuthSettings


@pytest.fixture
async def anonymous_client(app: FastAPI, db: Path):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestBearerToken:
    async def test_missing_token_is_401(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/api/stock/alerts")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "UNAUTHORIZED"

    async def test_unknown_token_is_401(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get(
            "/api/purchase-orders/stats", headers={"Authorization": "Bearer wrong"}
        )
        assert response.status_code == 401

    async def test_health_needs_no_token(self, anonymous_client: AsyncClient):
        assert (await anonymous_client.get("/api/health")).status_code == 200
        assert (await anonymous_client.get("/health")).status_code == 200

    async def test_disabled_auth_acts_as_anonymous(
        self, app: FastAPI, anonymous_client: AsyncClient, settings: Settings, seed
    ):
        open_settings = settings.model_copy(update={"auth": AuthSettings(enabled=False)})
        app.dependency_overrides[get_app_settings] = lambda: open_settings

        added = await anonymous_client.post(
            "/api/stock/add",
            json={"product_id": seed.product.id, "warehouse_id": seed.main.id, "quantity": 2},
        )
        events = await anonymous_client.get("/api/audit-events", params={"limit": 1})

        assert added.status_code == 201
        assert events.json()["data"][0]["actor"] == "anonymous"
