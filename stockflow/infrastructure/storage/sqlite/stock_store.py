"""SQLite implementation of stock record queries."""

from stockflow.config import get_logger
from stockflow.core.entities.stock import ReorderCandidate, StockLevel, StockRecord
from stockflow.core.interfaces.stock_store import IStockStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection
from stockflow.infrastructure.storage.sqlite.rows import (
    PRODUCT_COLUMNS,
    STOCK_COLUMNS,
    SUPPLIER_COLUMNS,
    WAREHOUSE_COLUMNS,
    prefixed,
    row_to_product,
    row_to_stock_level,
    row_to_stock_record,
    row_to_supplier,
    row_to_warehouse,
)

logger = get_logger(__name__)

_LEVEL_SELECT = """
    SELECT s.*, p.name AS product_name, p.reorder_threshold,
           w.name AS warehouse_name
    FROM stock_records s
    JOIN products p ON p.id = s.product_id
    JOIN warehouses w ON w.id = s.warehouse_id
"""

_CANDIDATE_SELECT = f"""
    SELECT {prefixed("s", STOCK_COLUMNS)},
           {prefixed("p", PRODUCT_COLUMNS)},
           {prefixed("w", WAREHOUSE_COLUMNS)},
           {prefixed("sup", SUPPLIER_COLUMNS)}
    FROM stock_records s
    JOIN products p ON p.id = s.product_id
    JOIN warehouses w ON w.id = s.warehouse_id
    JOIN suppliers sup ON sup.id = p.default_supplier_id
    WHERE s.quantity < p.reorder_threshold
      AND p.is_active = 1
      AND w.is_active = 1
      AND sup.is_active = 1
    ORDER BY s.product_id, s.warehouse_id
"""


class SQLiteStockStore(IStockStore):
    """SQLite implementation of the stock ledger read side."""

    async def get_record(self, product_id: str, warehouse_id: str) -> StockRecord | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_records WHERE product_id = ? AND warehouse_id = ?",
                (product_id, warehouse_id),
            )
            row = await cursor.fetchone()
            return row_to_stock_record(row) if row else None

    async def list_by_warehouse(self, warehouse_id: str) -> list[StockLevel]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                _LEVEL_SELECT + " WHERE s.warehouse_id = ? ORDER BY p.name",
                (warehouse_id,),
            )
            rows = await cursor.fetchall()
            return [row_to_stock_level(row) for row in rows]

    async def list_by_product(self, product_id: str) -> list[StockLevel]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                _LEVEL_SELECT + " WHERE s.product_id = ? ORDER BY w.name",
                (product_id,),
            )
            rows = await cursor.fetchall()
            return [row_to_stock_level(row) for row in rows]

    async def list_below_threshold(
        self, warehouse_id: str | None = None
    ) -> list[StockLevel]:
        sql = _LEVEL_SELECT + """
            WHERE s.quantity < p.reorder_threshold
              AND p.is_active = 1
              AND w.is_active = 1
        """
        params: tuple = ()
        if warehouse_id is not None:
            sql += " AND s.warehouse_id = ?"
            params = (warehouse_id,)
        sql += " ORDER BY s.product_id, s.warehouse_id"

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [row_to_stock_level(row) for row in rows]

    async def list_reorder_candidates(self) -> list[ReorderCandidate]:
        async with get_connection() as conn:
            cursor = await conn.execute(_CANDIDATE_SELECT)
            rows = await cursor.fetchall()

        candidates = [
            ReorderCandidate(
                record=row_to_stock_record(row, prefix="s_"),
                product=row_to_product(row, prefix="p_"),
                warehouse=row_to_warehouse(row, prefix="w_"),
                supplier=row_to_supplier(row, prefix="sup_"),
            )
            for row in rows
        ]
        logger.debug("reorder_candidates_loaded", count=len(candidates))
        return candidates

    async def total_quantity_by_product(self, product_id: str) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COALESCE(SUM(quantity), 0) FROM stock_records WHERE product_id = ?",
                (product_id,),
            )
            row = await cursor.fetchone()
            return int(row[0])
