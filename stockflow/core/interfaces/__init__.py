"""Core interfaces (ports) for dependency injection."""

from stockflow.core.interfaces.audit_sink import IAuditSink
from stockflow.core.interfaces.catalog_store import ICatalogStore
from stockflow.core.interfaces.ledger import ILedger, ILedgerTransaction
from stockflow.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockflow.core.interfaces.stock_store import IStockStore
from stockflow.core.interfaces.warehouse_store import IWarehouseStore

__all__ = [
    # Storage interfaces
    "ICatalogStore",
    "IWarehouseStore",
    "IStockStore",
    "IPurchaseOrderStore",
    # Transaction boundary
    "ILedger",
    "ILedgerTransaction",
    # Audit
    "IAuditSink",
]
