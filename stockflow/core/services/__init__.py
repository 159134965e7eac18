"""
Core business logic services.

Layer-pure services that depend only on:
- stockflow/core/entities/*
- stockflow/core/interfaces/*
- stockflow/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockflow.core.services.audit_notifier import AuditNotifier
from stockflow.core.services.catalog_service import CatalogService
from stockflow.core.services.purchase_orders import (
    OrderPage,
    PurchaseOrderService,
    ReceiveResult,
)
from stockflow.core.services.reorder_scanner import ReorderScanner
from stockflow.core.services.stock_transactions import (
    StockChangeResult,
    StockTransactionService,
    TransferResult,
)
from stockflow.core.services.warehouse_capacity import WarehouseCapacityService

__all__ = [
    # Audit
    "AuditNotifier",
    # Validators
    "CatalogService",
    "WarehouseCapacityService",
    # Stock
    "StockTransactionService",
    "StockChangeResult",
    "TransferResult",
    # Purchase orders
    "PurchaseOrderService",
    "ReceiveResult",
    "OrderPage",
    # Reorder
    "ReorderScanner",
]
