"""
Transaction boundary for stock and purchase order mutations.

Every change to a quantity, an occupancy or an order status happens on an
ILedgerTransaction obtained from ``ILedger.atomic()``. The transaction
commits when the block exits normally and rolls back on any exception.

The increment/decrement operations re-check their invariant at write time
and raise the matching domain error instead of writing:

    async with ledger.atomic() as tx:
        await tx.decrement_stock(product_id, source_id, 5)
        await tx.decrement_occupancy(source_id, 5)
        await tx.increment_occupancy(destination_id, 5)   # CapacityExceededError
        await tx.increment_stock(product_id, destination_id, 5)
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from stockflow.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockflow.core.entities.stock import StockRecord
from stockflow.core.entities.warehouse import Warehouse


class ILedgerTransaction(ABC):
    """Operations available inside one atomic unit."""

    @abstractmethod
    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        pass

    @abstractmethod
    async def get_stock_record(
        self, product_id: str, warehouse_id: str
    ) -> StockRecord | None:
        pass

    @abstractmethod
    async def increment_stock(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        restocked_at: datetime | None = None,
    ) -> StockRecord:
        """Create the record or add to it, refreshing last_restocked."""
        pass

    @abstractmethod
    async def decrement_stock(
        self, product_id: str, warehouse_id: str, quantity: int
    ) -> StockRecord:
        """
        Subtract from a record.

        Raises StockRecordNotFoundError or InsufficientStockError.
        """
        pass

    @abstractmethod
    async def increment_occupancy(self, warehouse_id: str, quantity: int) -> Warehouse:
        """Raises WarehouseNotFoundError or CapacityExceededError."""
        pass

    @abstractmethod
    async def decrement_occupancy(self, warehouse_id: str, quantity: int) -> Warehouse:
        """Raises WarehouseNotFoundError, or StorageError on underflow."""
        pass

    @abstractmethod
    async def pending_quantity(self, warehouse_id: str) -> int:
        """Units on PENDING orders bound for a warehouse."""
        pass

    @abstractmethod
    async def get_purchase_order(self, order_id: str) -> PurchaseOrder | None:
        pass

    @abstractmethod
    async def insert_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Persist a new order, assigning its id."""
        pass

    @abstractmethod
    async def update_purchase_order(
        self,
        order: PurchaseOrder,
        expected_status: OrderStatus = OrderStatus.PENDING,
    ) -> PurchaseOrder:
        """
        Write an order back if it is still in ``expected_status``.

        Raises InvalidStateError when another writer moved it first.
        """
        pass


class ILedger(ABC):
    """Factory for atomic units over the stock and order tables."""

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[ILedgerTransaction]:
        """Open a transaction; commit on normal exit, roll back on error."""
        pass
