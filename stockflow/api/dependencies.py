"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Tests replace any of these
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from stockflow.application.services import (
    get_catalog_service,
    get_purchase_order_service,
    get_reorder_scanner,
    get_stock_service,
    get_warehouse_service,
)
from stockflow.config import Settings, get_settings
from stockflow.core.interfaces import IAuditSink
from stockflow.core.services import (
    CatalogService,
    PurchaseOrderService,
    ReorderScanner,
    StockTransactionService,
    WarehouseCapacityService,
)
from stockflow.infrastructure.storage.sqlite import get_audit_store


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
async def get_stock() -> StockTransactionService:
    """Get stock transaction service."""
    return await get_stock_service()


async def get_warehouses() -> WarehouseCapacityService:
    """Get warehouse capacity service."""
    return await get_warehouse_service()


async def get_catalog() -> CatalogService:
    """Get catalog service."""
    return await get_catalog_service()


async def get_orders() -> PurchaseOrderService:
    """Get purchase order service."""
    return await get_purchase_order_service()


async def get_scanner() -> ReorderScanner:
    """Get reorder scanner."""
    return await get_reorder_scanner()


# Store dependencies
async def get_audit_sink() -> IAuditSink:
    """Get audit event store."""
    return await get_audit_store()
