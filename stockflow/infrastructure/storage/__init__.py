"""Storage infrastructure implementations."""

from stockflow.infrastructure.storage.sqlite import (
    SQLiteAuditStore,
    SQLiteCatalogStore,
    SQLiteLedger,
    SQLitePurchaseOrderStore,
    SQLiteStockStore,
    SQLiteWarehouseStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCatalogStore",
    "SQLiteWarehouseStore",
    "SQLiteStockStore",
    "SQLitePurchaseOrderStore",
    "SQLiteAuditStore",
    "SQLiteLedger",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
