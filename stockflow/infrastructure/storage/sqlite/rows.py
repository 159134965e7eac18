"""Row to entity converters shared by the SQLite stores and the ledger."""

import aiosqlite

from stockflow.core.entities.catalog import Product, Supplier
from stockflow.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockflow.core.entities.stock import StockLevel, StockRecord
from stockflow.core.entities.timestamps import parse_timestamp, utcnow
from stockflow.core.entities.warehouse import Warehouse

# Column lists for joins that need every entity with a distinct prefix
WAREHOUSE_COLUMNS = (
    "id, name, location, capacity, current_occupancy, is_active, created_at, updated_at"
)
PRODUCT_COLUMNS = (
    "id, name, description, reorder_threshold, default_supplier_id, "
    "is_active, created_at, updated_at"
)
SUPPLIER_COLUMNS = "id, name, contact_info, is_active, created_at, updated_at"
STOCK_COLUMNS = "id, product_id, warehouse_id, quantity, last_restocked, created_at, updated_at"


def prefixed(alias: str, columns: str) -> str:
    """``w.id AS w_id, w.name AS w_name, ...`` for a table alias."""
    return ", ".join(
        f"{alias}.{col.strip()} AS {alias}_{col.strip()}" for col in columns.split(",")
    )


def row_to_warehouse(row: aiosqlite.Row, prefix: str = "") -> Warehouse:
    return Warehouse(
        id=row[f"{prefix}id"],
        name=row[f"{prefix}name"],
        location=row[f"{prefix}location"],
        capacity=row[f"{prefix}capacity"],
        current_occupancy=row[f"{prefix}current_occupancy"],
        is_active=bool(row[f"{prefix}is_active"]),
        created_at=parse_timestamp(row[f"{prefix}created_at"]) or utcnow(),
        updated_at=parse_timestamp(row[f"{prefix}updated_at"]) or utcnow(),
    )


def row_to_supplier(row: aiosqlite.Row, prefix: str = "") -> Supplier:
    return Supplier(
        id=row[f"{prefix}id"],
        name=row[f"{prefix}name"],
        contact_info=row[f"{prefix}contact_info"] or "",
        is_active=bool(row[f"{prefix}is_active"]),
        created_at=parse_timestamp(row[f"{prefix}created_at"]) or utcnow(),
        updated_at=parse_timestamp(row[f"{prefix}updated_at"]) or utcnow(),
    )


def row_to_product(row: aiosqlite.Row, prefix: str = "") -> Product:
    return Product(
        id=row[f"{prefix}id"],
        name=row[f"{prefix}name"],
        description=row[f"{prefix}description"],
        reorder_threshold=row[f"{prefix}reorder_threshold"],
        default_supplier_id=row[f"{prefix}default_supplier_id"],
        is_active=bool(row[f"{prefix}is_active"]),
        created_at=parse_timestamp(row[f"{prefix}created_at"]) or utcnow(),
        updated_at=parse_timestamp(row[f"{prefix}updated_at"]) or utcnow(),
    )


def row_to_stock_record(row: aiosqlite.Row, prefix: str = "") -> StockRecord:
    return StockRecord(
        id=row[f"{prefix}id"],
        product_id=row[f"{prefix}product_id"],
        warehouse_id=row[f"{prefix}warehouse_id"],
        quantity=row[f"{prefix}quantity"],
        last_restocked=parse_timestamp(row[f"{prefix}last_restocked"]) or utcnow(),
        created_at=parse_timestamp(row[f"{prefix}created_at"]) or utcnow(),
        updated_at=parse_timestamp(row[f"{prefix}updated_at"]) or utcnow(),
    )


def row_to_stock_level(row: aiosqlite.Row) -> StockLevel:
    """Row of ``stock_records`` joined with product and warehouse names."""
    return StockLevel(
        record=row_to_stock_record(row),
        product_name=row["product_name"],
        warehouse_name=row["warehouse_name"],
        reorder_threshold=row["reorder_threshold"],
    )


def row_to_purchase_order(row: aiosqlite.Row) -> PurchaseOrder:
    return PurchaseOrder(
        id=row["id"],
        product_id=row["product_id"],
        supplier_id=row["supplier_id"],
        warehouse_id=row["warehouse_id"],
        quantity_ordered=row["quantity_ordered"],
        order_date=parse_timestamp(row["order_date"]) or utcnow(),
        expected_arrival_date=parse_timestamp(row["expected_arrival_date"]) or utcnow(),
        actual_arrival_date=parse_timestamp(row["actual_arrival_date"]),
        status=OrderStatus(row["status"]),
        notes=row["notes"],
        created_at=parse_timestamp(row["created_at"]) or utcnow(),
        updated_at=parse_timestamp(row["updated_at"]) or utcnow(),
    )
