"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from stockflow.api.dependencies import get_app_settings
from stockflow.application.services import reset_services
from stockflow.config import Settings, clear_request_context, get_settings, reset_settings
from stockflow.core.entities import Product, Supplier, Warehouse
from stockflow.infrastructure.storage.sqlite import (
    close_pool,
    get_catalog_store,
    get_warehouse_store,
)
from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

API_TOKEN = "test-token"


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Settings, None, None]:
    """Settings pointing at a throwaway data directory."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STORAGE_POOL_SIZE", "3")
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("AUTH_API_TOKENS", f'["{API_TOKEN}"]')
    reset_settings()
    reset_services()
    get_app_settings.cache_clear()
    clear_request_context()

    yield get_settings()

    reset_settings()
    reset_services()
    get_app_settings.cache_clear()
    clear_request_context()


@pytest.fixture
async def db(settings: Settings) -> AsyncGenerator[Path, None]:
    """Migrated temporary database; the pool is closed afterwards."""
    results = await initialize_database(create_backup_before=False)
    assert all(r.success for r in results)
    yield settings.storage.db_path
    await close_pool()


@dataclass
class Seed:
    supplier: Supplier
    product: Product
    main: Warehouse
    overflow: Warehouse


@pytest.fixture
async def seed(db: Path) -> Seed:
    """One supplier, one product (threshold 20) and two empty warehouses."""
    catalog = await get_catalog_store()
    warehouses = await get_warehouse_store()

    supplier = await catalog.create_supplier(
        Supplier(name="Acme Supply", contact_info="orders@acme.test")
    )
    product = await catalog.create_product(
        Product(
            name="Cable 3x2.5mm",
            reorder_threshold=20,
            default_supplier_id=supplier.id,
        )
    )
    main = await warehouses.create_warehouse(
        Warehouse(name="Main", location="Algiers", capacity=100)
    )
    overflow = await warehouses.create_warehouse(
        Warehouse(name="Overflow", location="Oran", capacity=50)
    )
    return Seed(supplier=supplier, product=product, main=main, overflow=overflow)


@pytest.fixture
def app(settings: Settings) -> Generator[FastAPI, None, None]:
    """The API application, imported once settings point at the temp dir."""
    from stockflow.api.main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI, db: Path) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated async client for the API."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {API_TOKEN}"},
    ) as ac:
        yield ac
