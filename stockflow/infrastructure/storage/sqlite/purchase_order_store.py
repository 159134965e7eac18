"""SQLite implementation of purchase order queries."""

from datetime import datetime

from stockflow.config import get_logger
from stockflow.core.entities.purchase_order import (
    OrderStats,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderFilters,
)
from stockflow.core.entities.timestamps import format_timestamp
from stockflow.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection
from stockflow.infrastructure.storage.sqlite.rows import row_to_purchase_order

logger = get_logger(__name__)


def _where_clause(filters: PurchaseOrderFilters | None) -> tuple[str, list]:
    """Build a WHERE clause and its parameters from listing filters."""
    if filters is None:
        return "", []

    conditions: list[str] = []
    params: list = []
    if filters.status is not None:
        conditions.append("status = ?")
        params.append(filters.status.value)
    for column in ("product_id", "warehouse_id", "supplier_id"):
        value = getattr(filters, column)
        if value is not None:
            conditions.append(f"{column} = ?")
            params.append(value)
    if filters.order_date_from is not None:
        conditions.append("order_date >= ?")
        params.append(format_timestamp(filters.order_date_from))
    if filters.order_date_to is not None:
        conditions.append("order_date <= ?")
        params.append(format_timestamp(filters.order_date_to))

    if not conditions:
        return "", []
    return " WHERE " + " AND ".join(conditions), params


class SQLitePurchaseOrderStore(IPurchaseOrderStore):
    """SQLite implementation of the purchase order read side."""

    async def get_order(self, order_id: str) -> PurchaseOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM purchase_orders WHERE id = ?", (order_id,)
            )
            row = await cursor.fetchone()
            return row_to_purchase_order(row) if row else None

    async def list_orders(
        self,
        filters: PurchaseOrderFilters | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[PurchaseOrder], int]:
        where, params = _where_clause(filters)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM purchase_orders{where}", params
            )
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"""
                SELECT * FROM purchase_orders{where}
                ORDER BY order_date DESC, created_at DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()
            return [row_to_purchase_order(row) for row in rows], total

    async def list_pending(self) -> list[PurchaseOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM purchase_orders
                WHERE status = ?
                ORDER BY expected_arrival_date ASC
                """,
                (OrderStatus.PENDING.value,),
            )
            rows = await cursor.fetchall()
            return [row_to_purchase_order(row) for row in rows]

    async def list_overdue(self, now: datetime) -> list[PurchaseOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM purchase_orders
                WHERE status = ? AND expected_arrival_date < ?
                ORDER BY expected_arrival_date ASC
                """,
                (OrderStatus.PENDING.value, format_timestamp(now)),
            )
            rows = await cursor.fetchall()
            return [row_to_purchase_order(row) for row in rows]

    async def get_stats(self) -> OrderStats:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT status, COUNT(*) FROM purchase_orders GROUP BY status"
            )
            counts = {row[0]: row[1] for row in await cursor.fetchall()}

        return OrderStats(
            total=sum(counts.values()),
            pending=counts.get(OrderStatus.PENDING.value, 0),
            received=counts.get(OrderStatus.RECEIVED.value, 0),
            cancelled=counts.get(OrderStatus.CANCELLED.value, 0),
        )

    async def has_pending_order(self, product_id: str, warehouse_id: str) -> bool:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT 1 FROM purchase_orders
                WHERE product_id = ? AND warehouse_id = ? AND status = ?
                LIMIT 1
                """,
                (product_id, warehouse_id, OrderStatus.PENDING.value),
            )
            return await cursor.fetchone() is not None

    async def pending_quantity(self, warehouse_id: str) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COALESCE(SUM(quantity_ordered), 0) FROM purchase_orders
                WHERE warehouse_id = ? AND status = ?
                """,
                (warehouse_id, OrderStatus.PENDING.value),
            )
            row = await cursor.fetchone()
            return int(row[0])
