"""
Service factory functions for dependency injection.

Wires the SQLite infrastructure and settings into the core services.
Routes and the CLI get their services from here, never by constructing
stores themselves.
"""

from stockflow.config import get_settings
from stockflow.core.services import (
    AuditNotifier,
    CatalogService,
    PurchaseOrderService,
    ReorderScanner,
    StockTransactionService,
    WarehouseCapacityService,
)

# Singleton service instances
_audit_notifier: AuditNotifier | None = None
_catalog_service: CatalogService | None = None
_warehouse_service: WarehouseCapacityService | None = None
_stock_service: StockTransactionService | None = None
_purchase_order_service: PurchaseOrderService | None = None
_reorder_scanner: ReorderScanner | None = None


async def get_audit_notifier() -> AuditNotifier:
    global _audit_notifier
    if _audit_notifier is None:
        from stockflow.infrastructure.storage.sqlite import get_audit_store

        _audit_notifier = AuditNotifier(await get_audit_store())
    return _audit_notifier


async def get_catalog_service() -> CatalogService:
    global _catalog_service
    if _catalog_service is None:
        from stockflow.infrastructure.storage.sqlite import (
            get_catalog_store,
            get_stock_store,
        )

        _catalog_service = CatalogService(
            catalog_store=await get_catalog_store(),
            stock_store=await get_stock_store(),
            audit=await get_audit_notifier(),
        )
    return _catalog_service


async def get_warehouse_service() -> WarehouseCapacityService:
    global _warehouse_service
    if _warehouse_service is None:
        from stockflow.infrastructure.storage.sqlite import (
            get_purchase_order_store,
            get_warehouse_store,
        )

        settings = get_settings()
        _warehouse_service = WarehouseCapacityService(
            warehouse_store=await get_warehouse_store(),
            order_store=await get_purchase_order_store(),
            reserve_pending_capacity=settings.orders.reserve_pending_capacity,
            audit=await get_audit_notifier(),
        )
    return _warehouse_service


async def get_stock_service() -> StockTransactionService:
    global _stock_service
    if _stock_service is None:
        from stockflow.infrastructure.storage.sqlite import get_ledger, get_stock_store

        _stock_service = StockTransactionService(
            ledger=await get_ledger(),
            stock_store=await get_stock_store(),
            catalog=await get_catalog_service(),
            warehouses=await get_warehouse_service(),
            audit=await get_audit_notifier(),
        )
    return _stock_service


async def get_purchase_order_service() -> PurchaseOrderService:
    global _purchase_order_service
    if _purchase_order_service is None:
        from stockflow.infrastructure.storage.sqlite import (
            get_ledger,
            get_purchase_order_store,
        )

        settings = get_settings()
        _purchase_order_service = PurchaseOrderService(
            ledger=await get_ledger(),
            order_store=await get_purchase_order_store(),
            catalog=await get_catalog_service(),
            warehouses=await get_warehouse_service(),
            audit=await get_audit_notifier(),
            default_lead_time_days=settings.orders.default_lead_time_days,
            reserve_pending_capacity=settings.orders.reserve_pending_capacity,
        )
    return _purchase_order_service


async def get_reorder_scanner() -> ReorderScanner:
    global _reorder_scanner
    if _reorder_scanner is None:
        from stockflow.infrastructure.storage.sqlite import get_stock_store

        settings = get_settings()
        _reorder_scanner = ReorderScanner(
            stock_store=await get_stock_store(),
            orders=await get_purchase_order_service(),
            warehouses=await get_warehouse_service(),
            audit=await get_audit_notifier(),
            lead_time_days=settings.reorder.lead_time_days,
            buffer_ratio=settings.reorder.buffer_ratio,
            min_order_ratio=settings.reorder.min_order_ratio,
        )
    return _reorder_scanner


def reset_services() -> None:
    """Drop cached services so the next call rebuilds them from settings."""
    global _audit_notifier, _catalog_service, _warehouse_service
    global _stock_service, _purchase_order_service, _reorder_scanner
    _audit_notifier = None
    _catalog_service = None
    _warehouse_service = None
    _stock_service = None
    _purchase_order_service = None
    _reorder_scanner = None
