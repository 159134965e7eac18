"""SQLite implementation of warehouse storage."""

import uuid

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.timestamps import format_timestamp, utcnow
from stockflow.core.entities.warehouse import Warehouse
from stockflow.core.exceptions import ConflictError
from stockflow.core.interfaces.warehouse_store import IWarehouseStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockflow.infrastructure.storage.sqlite.rows import row_to_warehouse

logger = get_logger(__name__)


class SQLiteWarehouseStore(IWarehouseStore):
    """SQLite implementation of warehouse storage."""

    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        warehouse.id = warehouse.id or str(uuid.uuid4())
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO warehouses (
                        id, name, location, capacity, current_occupancy,
                        is_active, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        warehouse.id,
                        warehouse.name,
                        warehouse.location,
                        warehouse.capacity,
                        warehouse.current_occupancy,
                        int(warehouse.is_active),
                        format_timestamp(warehouse.created_at),
                        format_timestamp(warehouse.updated_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise ConflictError("warehouse", "name", warehouse.name) from e

        logger.info(
            "warehouse_created",
            warehouse_id=warehouse.id,
            name=warehouse.name,
            capacity=warehouse.capacity,
        )
        return warehouse

    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM warehouses WHERE id = ?", (warehouse_id,)
            )
            row = await cursor.fetchone()
            return row_to_warehouse(row) if row else None

    async def list_warehouses(self, active_only: bool = True) -> list[Warehouse]:
        sql = "SELECT * FROM warehouses"
        if active_only:
            sql += " WHERE is_active = 1"
        sql += " ORDER BY name"
        async with get_connection() as conn:
            cursor = await conn.execute(sql)
            rows = await cursor.fetchall()
            return [row_to_warehouse(row) for row in rows]

    async def deactivate_warehouse(self, warehouse_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE warehouses SET is_active = 0, updated_at = ?
                WHERE id = ? AND current_occupancy = 0
                """,
                (format_timestamp(utcnow()), warehouse_id),
            )
            return cursor.rowcount > 0
