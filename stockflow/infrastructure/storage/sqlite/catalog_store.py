"""SQLite implementation of product and supplier storage."""

import uuid

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.catalog import Product, Supplier
from stockflow.core.entities.timestamps import format_timestamp, utcnow
from stockflow.core.exceptions import ConflictError
from stockflow.core.interfaces.catalog_store import ICatalogStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockflow.infrastructure.storage.sqlite.rows import row_to_product, row_to_supplier

logger = get_logger(__name__)


class SQLiteCatalogStore(ICatalogStore):
    """SQLite implementation of catalog storage."""

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        supplier.id = supplier.id or str(uuid.uuid4())
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO suppliers (
                        id, name, contact_info, is_active, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        supplier.id,
                        supplier.name,
                        supplier.contact_info,
                        int(supplier.is_active),
                        format_timestamp(supplier.created_at),
                        format_timestamp(supplier.updated_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise ConflictError("supplier", "name", supplier.name) from e

        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
            )
            row = await cursor.fetchone()
            return row_to_supplier(row) if row else None

    async def create_product(self, product: Product) -> Product:
        product.id = product.id or str(uuid.uuid4())
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (
                        id, name, description, reorder_threshold,
                        default_supplier_id, is_active, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.id,
                        product.name,
                        product.description,
                        product.reorder_threshold,
                        product.default_supplier_id,
                        int(product.is_active),
                        format_timestamp(product.created_at),
                        format_timestamp(product.updated_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise ConflictError("product", "name", product.name) from e

        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    async def get_product(self, product_id: str) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            return row_to_product(row) if row else None

    async def deactivate_product(self, product_id: str) -> bool:
        """Flip is_active off unless some warehouse still holds the product."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE products SET is_active = 0, updated_at = ?
                WHERE id = ?
                  AND NOT EXISTS (
                      SELECT 1 FROM stock_records
                      WHERE product_id = ? AND quantity > 0
                  )
                """,
                (format_timestamp(utcnow()), product_id, product_id),
            )
            return cursor.rowcount > 0
