"""
Stock transaction engine.

Adds, removes and transfers stock. Each operation validates against the
current state first so the caller gets a precise error, then applies all
of its record mutations inside one ledger transaction, which re-checks the
same rules at write time.
"""

from dataclasses import dataclass

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction
from stockflow.core.entities.stock import ProductStock, StockLevel, StockRecord
from stockflow.core.entities.warehouse import Warehouse
from stockflow.core.exceptions import (
    CapacityExceededError,
    InsufficientStockError,
    InvalidArgumentError,
    StockRecordNotFoundError,
)
from stockflow.core.interfaces.ledger import ILedger
from stockflow.core.interfaces.stock_store import IStockStore
from stockflow.core.services.audit_notifier import AuditNotifier
from stockflow.core.services.catalog_service import CatalogService
from stockflow.core.services.warehouse_capacity import WarehouseCapacityService

logger = get_logger(__name__)


@dataclass
class StockChangeResult:
    """Result of adding or removing stock."""

    record: StockRecord
    warehouse: Warehouse
    quantity: int
    created: bool = False  # True if the stock record was created by this change


@dataclass
class TransferResult:
    """Result of moving stock between warehouses."""

    source: StockRecord
    destination: StockRecord
    source_warehouse: Warehouse
    destination_warehouse: Warehouse
    quantity: int


def _require_positive(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidArgumentError("quantity", "must be a positive integer", quantity)


class StockTransactionService:
    """Atomic stock mutations plus stock level reads."""

    def __init__(
        self,
        ledger: ILedger,
        stock_store: IStockStore,
        catalog: CatalogService,
        warehouses: WarehouseCapacityService,
        audit: AuditNotifier | None = None,
    ) -> None:
        self._ledger = ledger
        self._stock = stock_store
        self._catalog = catalog
        self._warehouses = warehouses
        self._audit = audit or AuditNotifier()

    async def add_stock(
        self, product_id: str, warehouse_id: str, quantity: int
    ) -> StockChangeResult:
        """Put ``quantity`` units of a product into a warehouse."""
        _require_positive(quantity)

        await self._catalog.get_product(product_id)
        warehouse = await self._warehouses.get_warehouse(warehouse_id)
        if not warehouse.can_accommodate(quantity):
            raise CapacityExceededError(
                warehouse_id, quantity, warehouse.available_capacity
            )

        async with self._ledger.atomic() as tx:
            existing = await tx.get_stock_record(product_id, warehouse_id)
            warehouse = await tx.increment_occupancy(warehouse_id, quantity)
            record = await tx.increment_stock(product_id, warehouse_id, quantity)

        logger.info(
            "stock_added",
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            new_quantity=record.quantity,
            occupancy=warehouse.current_occupancy,
        )
        await self._audit.notify(
            AuditAction.STOCK_ADDED,
            "stock",
            record.id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
        )
        return StockChangeResult(
            record=record,
            warehouse=warehouse,
            quantity=quantity,
            created=existing is None,
        )

    async def remove_stock(
        self, product_id: str, warehouse_id: str, quantity: int
    ) -> StockChangeResult:
        """Take ``quantity`` units of a product out of a warehouse."""
        _require_positive(quantity)

        await self._catalog.get_product(product_id)
        await self._warehouses.get_warehouse(warehouse_id)

        existing = await self._stock.get_record(product_id, warehouse_id)
        if existing is None:
            raise StockRecordNotFoundError(product_id, warehouse_id)
        if existing.quantity < quantity:
            raise InsufficientStockError(
                product_id, warehouse_id, quantity, existing.quantity
            )

        async with self._ledger.atomic() as tx:
            record = await tx.decrement_stock(product_id, warehouse_id, quantity)
            warehouse = await tx.decrement_occupancy(warehouse_id, quantity)

        logger.info(
            "stock_removed",
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            new_quantity=record.quantity,
            occupancy=warehouse.current_occupancy,
        )
        await self._audit.notify(
            AuditAction.STOCK_REMOVED,
            "stock",
            record.id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
        )
        return StockChangeResult(record=record, warehouse=warehouse, quantity=quantity)

    async def transfer_stock(
        self,
        product_id: str,
        from_warehouse_id: str,
        to_warehouse_id: str,
        quantity: int,
    ) -> TransferResult:
        """
        Move stock between two warehouses.

        Source record, source occupancy, destination occupancy and
        destination record change together or not at all.
        """
        _require_positive(quantity)
        if from_warehouse_id == to_warehouse_id:
            raise InvalidArgumentError(
                "to_warehouse_id",
                "source and destination warehouses must be different",
                to_warehouse_id,
            )

        await self._catalog.get_product(product_id)
        await self._warehouses.get_warehouse(from_warehouse_id)
        destination = await self._warehouses.get_warehouse(to_warehouse_id)

        source_record = await self._stock.get_record(product_id, from_warehouse_id)
        if source_record is None:
            raise StockRecordNotFoundError(product_id, from_warehouse_id)
        if source_record.quantity < quantity:
            raise InsufficientStockError(
                product_id, from_warehouse_id, quantity, source_record.quantity
            )
        if not destination.can_accommodate(quantity):
            raise CapacityExceededError(
                to_warehouse_id, quantity, destination.available_capacity
            )

        async with self._ledger.atomic() as tx:
            source = await tx.decrement_stock(product_id, from_warehouse_id, quantity)
            source_warehouse = await tx.decrement_occupancy(from_warehouse_id, quantity)
            destination_warehouse = await tx.increment_occupancy(
                to_warehouse_id, quantity
            )
            target = await tx.increment_stock(product_id, to_warehouse_id, quantity)

        logger.info(
            "stock_transferred",
            product_id=product_id,
            from_warehouse_id=from_warehouse_id,
            to_warehouse_id=to_warehouse_id,
            quantity=quantity,
        )
        await self._audit.notify(
            AuditAction.STOCK_TRANSFERRED,
            "stock",
            source.id,
            product_id=product_id,
            from_warehouse_id=from_warehouse_id,
            to_warehouse_id=to_warehouse_id,
            quantity=quantity,
        )
        return TransferResult(
            source=source,
            destination=target,
            source_warehouse=source_warehouse,
            destination_warehouse=destination_warehouse,
            quantity=quantity,
        )

    async def warehouse_stock_levels(self, warehouse_id: str) -> list[StockLevel]:
        await self._warehouses.get_warehouse(warehouse_id)
        return await self._stock.list_by_warehouse(warehouse_id)

    async def product_stock(self, product_id: str) -> ProductStock:
        """Per-warehouse stock of a product with its total."""
        await self._catalog.get_product(product_id)
        levels = await self._stock.list_by_product(product_id)
        return ProductStock(product_id=product_id, levels=levels)

    async def low_stock_alerts(self, warehouse_id: str) -> list[StockLevel]:
        await self._warehouses.get_warehouse(warehouse_id)
        return await self._stock.list_below_threshold(warehouse_id)

    async def all_low_stock(self) -> list[StockLevel]:
        return await self._stock.list_below_threshold()
