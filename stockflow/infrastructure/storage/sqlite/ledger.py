"""
SQLite ledger: the transaction boundary for stock and order mutations.

``atomic()`` opens a ``BEGIN IMMEDIATE`` transaction on one pooled
connection, so writers serialize on the database lock and nothing another
writer does can slip between a read and a write inside the block.
Counter updates are conditional; a zero row count means the invariant
would break and is turned into the matching domain error.
"""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockflow.core.entities.stock import StockRecord
from stockflow.core.entities.timestamps import format_timestamp, utcnow
from stockflow.core.entities.warehouse import Warehouse
from stockflow.core.exceptions import (
    CapacityExceededError,
    DatabaseError,
    InsufficientStockError,
    InvalidStateError,
    PurchaseOrderNotFoundError,
    StockRecordNotFoundError,
    WarehouseNotFoundError,
)
from stockflow.core.interfaces.ledger import ILedger, ILedgerTransaction
from stockflow.infrastructure.storage.sqlite.connection import get_transaction
from stockflow.infrastructure.storage.sqlite.rows import (
    row_to_purchase_order,
    row_to_stock_record,
    row_to_warehouse,
)

logger = get_logger(__name__)


class SQLiteLedgerTransaction(ILedgerTransaction):
    """Ledger operations bound to one open connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        cursor = await self._conn.execute(
            "SELECT * FROM warehouses WHERE id = ?", (warehouse_id,)
        )
        row = await cursor.fetchone()
        return row_to_warehouse(row) if row else None

    async def _require_warehouse(self, warehouse_id: str) -> Warehouse:
        warehouse = await self.get_warehouse(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse

    async def get_stock_record(
        self, product_id: str, warehouse_id: str
    ) -> StockRecord | None:
        cursor = await self._conn.execute(
            "SELECT * FROM stock_records WHERE product_id = ? AND warehouse_id = ?",
            (product_id, warehouse_id),
        )
        row = await cursor.fetchone()
        return row_to_stock_record(row) if row else None

    async def increment_stock(
        self,
        product_id: str,
        warehouse_id: str,
        quantity: int,
        restocked_at: datetime | None = None,
    ) -> StockRecord:
        now = format_timestamp(utcnow())
        restocked = format_timestamp(restocked_at) if restocked_at else now
        await self._conn.execute(
            """
            INSERT INTO stock_records (
                id, product_id, warehouse_id, quantity,
                last_restocked, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(product_id, warehouse_id) DO UPDATE SET
                quantity = quantity + excluded.quantity,
                last_restocked = excluded.last_restocked,
                updated_at = excluded.updated_at
            """,
            (str(uuid.uuid4()), product_id, warehouse_id, quantity, restocked, now, now),
        )
        record = await self.get_stock_record(product_id, warehouse_id)
        if record is None:
            raise DatabaseError("increment_stock", "upserted stock record not found")
        return record

    async def decrement_stock(
        self, product_id: str, warehouse_id: str, quantity: int
    ) -> StockRecord:
        cursor = await self._conn.execute(
            """
            UPDATE stock_records SET quantity = quantity - ?, updated_at = ?
            WHERE product_id = ? AND warehouse_id = ? AND quantity >= ?
            """,
            (quantity, format_timestamp(utcnow()), product_id, warehouse_id, quantity),
        )
        record = await self.get_stock_record(product_id, warehouse_id)
        if record is None:
            raise StockRecordNotFoundError(product_id, warehouse_id)
        if cursor.rowcount == 0:
            raise InsufficientStockError(product_id, warehouse_id, quantity, record.quantity)
        return record

    async def increment_occupancy(self, warehouse_id: str, quantity: int) -> Warehouse:
        cursor = await self._conn.execute(
            """
            UPDATE warehouses
            SET current_occupancy = current_occupancy + ?, updated_at = ?
            WHERE id = ? AND current_occupancy + ? <= capacity
            """,
            (quantity, format_timestamp(utcnow()), warehouse_id, quantity),
        )
        warehouse = await self._require_warehouse(warehouse_id)
        if cursor.rowcount == 0:
            raise CapacityExceededError(
                warehouse_id, quantity, warehouse.available_capacity
            )
        return warehouse

    async def decrement_occupancy(self, warehouse_id: str, quantity: int) -> Warehouse:
        cursor = await self._conn.execute(
            """
            UPDATE warehouses
            SET current_occupancy = current_occupancy - ?, updated_at = ?
            WHERE id = ? AND current_occupancy >= ?
            """,
            (quantity, format_timestamp(utcnow()), warehouse_id, quantity),
        )
        warehouse = await self._require_warehouse(warehouse_id)
        if cursor.rowcount == 0:
            raise DatabaseError(
                "decrement_occupancy",
                f"occupancy {warehouse.current_occupancy} of warehouse "
                f"{warehouse_id} is below {quantity}",
            )
        return warehouse

    async def pending_quantity(self, warehouse_id: str) -> int:
        cursor = await self._conn.execute(
            """
            SELECT COALESCE(SUM(quantity_ordered), 0) FROM purchase_orders
            WHERE warehouse_id = ? AND status = ?
            """,
            (warehouse_id, OrderStatus.PENDING.value),
        )
        row = await cursor.fetchone()
        return int(row[0])

    async def get_purchase_order(self, order_id: str) -> PurchaseOrder | None:
        cursor = await self._conn.execute(
            "SELECT * FROM purchase_orders WHERE id = ?", (order_id,)
        )
        row = await cursor.fetchone()
        return row_to_purchase_order(row) if row else None

    async def insert_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        order.id = order.id or str(uuid.uuid4())
        await self._conn.execute(
            """
            INSERT INTO purchase_orders (
                id, product_id, supplier_id, warehouse_id, quantity_ordered,
                order_date, expected_arrival_date, actual_arrival_date,
                status, notes, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                order.id,
                order.product_id,
                order.supplier_id,
                order.warehouse_id,
                order.quantity_ordered,
                format_timestamp(order.order_date),
                format_timestamp(order.expected_arrival_date),
                format_timestamp(order.actual_arrival_date)
                if order.actual_arrival_date
                else None,
                order.status.value,
                order.notes,
                format_timestamp(order.created_at),
                format_timestamp(order.updated_at),
            ),
        )
        return order

    async def update_purchase_order(
        self,
        order: PurchaseOrder,
        expected_status: OrderStatus = OrderStatus.PENDING,
    ) -> PurchaseOrder:
        cursor = await self._conn.execute(
            """
            UPDATE purchase_orders SET
                quantity_ordered = ?,
                expected_arrival_date = ?,
                actual_arrival_date = ?,
                status = ?,
                notes = ?,
                updated_at = ?
            WHERE id = ? AND status = ?
            """,
            (
                order.quantity_ordered,
                format_timestamp(order.expected_arrival_date),
                format_timestamp(order.actual_arrival_date)
                if order.actual_arrival_date
                else None,
                order.status.value,
                order.notes,
                format_timestamp(order.updated_at),
                order.id,
                expected_status.value,
            ),
        )
        if cursor.rowcount == 0:
            current = await self.get_purchase_order(order.id or "")
            if current is None:
                raise PurchaseOrderNotFoundError(order.id or "")
            raise InvalidStateError(
                "purchase_order", current.id or "", current.status.value, "update"
            )
        return order


class SQLiteLedger(ILedger):
    """Opens SQLiteLedgerTransaction units on the global connection pool."""

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[ILedgerTransaction]:
        async with get_transaction(immediate=True) as conn:
            try:
                yield SQLiteLedgerTransaction(conn)
            except Exception as e:
                logger.info(
                    "ledger_transaction_rolled_back",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise
