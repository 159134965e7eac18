"""SQLite storage implementations."""

from stockflow.infrastructure.storage.sqlite.audit_store import SQLiteAuditStore
from stockflow.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from stockflow.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from stockflow.infrastructure.storage.sqlite.ledger import (
    SQLiteLedger,
    SQLiteLedgerTransaction,
)
from stockflow.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)
from stockflow.infrastructure.storage.sqlite.stock_store import SQLiteStockStore
from stockflow.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_warehouse_store: SQLiteWarehouseStore | None = None
_stock_store: SQLiteStockStore | None = None
_purchase_order_store: SQLitePurchaseOrderStore | None = None
_audit_store: SQLiteAuditStore | None = None
_ledger: SQLiteLedger | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_warehouse_store() -> SQLiteWarehouseStore:
    """Get singleton warehouse store instance."""
    global _warehouse_store
    if _warehouse_store is None:
        _warehouse_store = SQLiteWarehouseStore()
    return _warehouse_store


async def get_stock_store() -> SQLiteStockStore:
    """Get singleton stock store instance."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteStockStore()
    return _stock_store


async def get_purchase_order_store() -> SQLitePurchaseOrderStore:
    """Get singleton purchase order store instance."""
    global _purchase_order_store
    if _purchase_order_store is None:
        _purchase_order_store = SQLitePurchaseOrderStore()
    return _purchase_order_store


async def get_audit_store() -> SQLiteAuditStore:
    """Get singleton audit store instance."""
    global _audit_store
    if _audit_store is None:
        _audit_store = SQLiteAuditStore()
    return _audit_store


async def get_ledger() -> SQLiteLedger:
    """Get singleton ledger instance."""
    global _ledger
    if _ledger is None:
        _ledger = SQLiteLedger()
    return _ledger


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteWarehouseStore",
    "SQLiteStockStore",
    "SQLitePurchaseOrderStore",
    "SQLiteAuditStore",
    "SQLiteLedger",
    "SQLiteLedgerTransaction",
    # Factory functions
    "get_catalog_store",
    "get_warehouse_store",
    "get_stock_store",
    "get_purchase_order_store",
    "get_audit_store",
    "get_ledger",
]
