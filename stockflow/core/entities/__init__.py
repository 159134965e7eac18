"""Core domain entities."""

from stockflow.core.entities.audit import AuditAction, AuditEvent
from stockflow.core.entities.catalog import Product, Supplier
from stockflow.core.entities.purchase_order import (
    ALLOWED_TRANSITIONS,
    OrderStats,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderFilters,
)
from stockflow.core.entities.reorder import (
    ReorderedItem,
    ReorderReport,
    SkippedItem,
    SkipReason,
)
from stockflow.core.entities.stock import (
    ProductStock,
    ReorderCandidate,
    StockLevel,
    StockRecord,
)
from stockflow.core.entities.timestamps import (
    ensure_utc,
    format_timestamp,
    parse_timestamp,
    utcnow,
)
from stockflow.core.entities.warehouse import CapacityBand, CapacityStatus, Warehouse

__all__ = [
    # Warehouse
    "Warehouse",
    "CapacityBand",
    "CapacityStatus",
    # Catalog
    "Product",
    "Supplier",
    # Stock
    "StockRecord",
    "StockLevel",
    "ProductStock",
    "ReorderCandidate",
    # Purchase orders
    "PurchaseOrder",
    "OrderStatus",
    "OrderStats",
    "PurchaseOrderFilters",
    "ALLOWED_TRANSITIONS",
    # Reorder
    "ReorderReport",
    "ReorderedItem",
    "SkippedItem",
    "SkipReason",
    # Audit
    "AuditAction",
    "AuditEvent",
    # Time
    "utcnow",
    "parse_timestamp",
    "format_timestamp",
    "ensure_utc",
]
