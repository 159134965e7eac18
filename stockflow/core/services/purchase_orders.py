"""
Purchase order lifecycle.

PENDING --receive--> RECEIVED
PENDING --cancel---> CANCELLED

Receiving is the only transition with ledger side effects: the ordered
quantity lands in the stock record and the warehouse occupancy in the same
transaction that flips the status.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction
from stockflow.core.entities.purchase_order import (
    OrderStats,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderFilters,
)
from stockflow.core.entities.stock import StockRecord
from stockflow.core.entities.timestamps import utcnow
from stockflow.core.entities.warehouse import Warehouse
from stockflow.core.exceptions import (
    CapacityExceededError,
    InvalidArgumentError,
    PurchaseOrderNotFoundError,
    WarehouseNotFoundError,
)
from stockflow.core.interfaces.ledger import ILedger, ILedgerTransaction
from stockflow.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockflow.core.services.audit_notifier import AuditNotifier
from stockflow.core.services.catalog_service import CatalogService
from stockflow.core.services.warehouse_capacity import WarehouseCapacityService

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


@dataclass
class ReceiveResult:
    """Result of receiving a purchase order."""

    order: PurchaseOrder
    record: StockRecord
    warehouse: Warehouse


@dataclass
class OrderPage:
    """One page of a purchase order listing."""

    orders: list[PurchaseOrder]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next_page(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


class PurchaseOrderService:
    """Creates purchase orders and drives them through their lifecycle."""

    def __init__(
        self,
        ledger: ILedger,
        order_store: IPurchaseOrderStore,
        catalog: CatalogService,
        warehouses: WarehouseCapacityService,
        audit: AuditNotifier | None = None,
        default_lead_time_days: int = 3,
        reserve_pending_capacity: bool = True,
    ) -> None:
        self._ledger = ledger
        self._orders = order_store
        self._catalog = catalog
        self._warehouses = warehouses
        self._audit = audit or AuditNotifier()
        self._default_lead_time_days = default_lead_time_days
        self._reserve_pending = reserve_pending_capacity

    async def _ensure_room(
        self, tx: ILedgerTransaction, warehouse_id: str, quantity: int
    ) -> None:
        """Re-check inside the transaction that ``quantity`` more units fit."""
        warehouse = await tx.get_warehouse(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(warehouse_id)
        available = warehouse.available_capacity
        if self._reserve_pending:
            available -= await tx.pending_quantity(warehouse_id)
        if available < quantity:
            raise CapacityExceededError(warehouse_id, quantity, max(available, 0))

    async def create_order(
        self,
        product_id: str,
        supplier_id: str,
        warehouse_id: str,
        quantity_ordered: int,
        notes: str | None = None,
        order_date: datetime | None = None,
        expected_arrival_date: datetime | None = None,
        lead_time_days: int | None = None,
    ) -> PurchaseOrder:
        """
        Place a PENDING order.

        ``expected_arrival_date`` defaults to ``order_date`` plus the lead
        time; the lead time defaults to the configured value.
        """
        if quantity_ordered <= 0:
            raise InvalidArgumentError(
                "quantity_ordered", "must be a positive integer", quantity_ordered
            )
        if lead_time_days is None:
            lead_time_days = self._default_lead_time_days
        if lead_time_days < 1:
            raise InvalidArgumentError(
                "lead_time_days", "must be at least 1 day", lead_time_days
            )

        await self._catalog.get_product(product_id)
        await self._catalog.get_supplier(supplier_id)
        available = await self._warehouses.reservable_capacity(warehouse_id)
        if available < quantity_ordered:
            raise CapacityExceededError(warehouse_id, quantity_ordered, available)

        order_date = order_date or utcnow()
        order = PurchaseOrder(
            product_id=product_id,
            supplier_id=supplier_id,
            warehouse_id=warehouse_id,
            quantity_ordered=quantity_ordered,
            order_date=order_date,
            expected_arrival_date=(
                expected_arrival_date or order_date + timedelta(days=lead_time_days)
            ),
            notes=notes,
        )

        async with self._ledger.atomic() as tx:
            await self._ensure_room(tx, warehouse_id, quantity_ordered)
            order = await tx.insert_purchase_order(order)

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity_ordered,
        )
        await self._audit.notify(
            AuditAction.PURCHASE_ORDER_CREATED,
            "purchase_order",
            order.id,
            product_id=product_id,
            supplier_id=supplier_id,
            warehouse_id=warehouse_id,
            quantity_ordered=quantity_ordered,
        )
        return order

    async def update_order(
        self,
        order_id: str,
        quantity_ordered: int | None = None,
        expected_arrival_date: datetime | None = None,
        notes: str | None = None,
    ) -> PurchaseOrder:
        """Change a PENDING order. A quantity increase must still fit."""
        if quantity_ordered is None and expected_arrival_date is None and notes is None:
            raise InvalidArgumentError(
                "update", "at least one field must be provided for update"
            )
        if quantity_ordered is not None and quantity_ordered <= 0:
            raise InvalidArgumentError(
                "quantity_ordered", "must be a positive integer", quantity_ordered
            )

        order = await self.get_order(order_id)
        order.ensure_pending("update")

        async with self._ledger.atomic() as tx:
            current = await tx.get_purchase_order(order_id)
            if current is None:
                raise PurchaseOrderNotFoundError(order_id)
            current.ensure_pending("update")

            if quantity_ordered is not None:
                delta = quantity_ordered - current.quantity_ordered
                if delta > 0:
                    await self._ensure_room(tx, current.warehouse_id, delta)
                current.quantity_ordered = quantity_ordered
            if expected_arrival_date is not None:
                current.expected_arrival_date = expected_arrival_date
            if notes is not None:
                current.notes = notes
            current.updated_at = utcnow()

            order = await tx.update_purchase_order(current)

        logger.info("purchase_order_updated", order_id=order_id)
        await self._audit.notify(
            AuditAction.PURCHASE_ORDER_UPDATED,
            "purchase_order",
            order_id,
            quantity_ordered=order.quantity_ordered,
        )
        return order

    async def cancel_order(self, order_id: str) -> PurchaseOrder:
        """Cancel a PENDING order. No stock or occupancy changes."""
        order = await self.get_order(order_id)
        order.ensure_pending("cancel")

        async with self._ledger.atomic() as tx:
            current = await tx.get_purchase_order(order_id)
            if current is None:
                raise PurchaseOrderNotFoundError(order_id)
            current.transition_to(OrderStatus.CANCELLED)
            order = await tx.update_purchase_order(current)

        logger.info("purchase_order_cancelled", order_id=order_id)
        await self._audit.notify(
            AuditAction.PURCHASE_ORDER_CANCELLED, "purchase_order", order_id
        )
        return order

    async def receive_order(self, order_id: str) -> ReceiveResult:
        """Mark a PENDING order received and book its quantity into stock."""
        order = await self.get_order(order_id)
        order.ensure_pending("receive")

        async with self._ledger.atomic() as tx:
            current = await tx.get_purchase_order(order_id)
            if current is None:
                raise PurchaseOrderNotFoundError(order_id)
            current.transition_to(OrderStatus.RECEIVED)
            order = await tx.update_purchase_order(current)
            warehouse = await tx.increment_occupancy(
                order.warehouse_id, order.quantity_ordered
            )
            record = await tx.increment_stock(
                order.product_id,
                order.warehouse_id,
                order.quantity_ordered,
                restocked_at=order.actual_arrival_date,
            )

        logger.info(
            "purchase_order_received",
            order_id=order_id,
            product_id=order.product_id,
            warehouse_id=order.warehouse_id,
            quantity=order.quantity_ordered,
            new_quantity=record.quantity,
        )
        await self._audit.notify(
            AuditAction.PURCHASE_ORDER_RECEIVED,
            "purchase_order",
            order_id,
            product_id=order.product_id,
            warehouse_id=order.warehouse_id,
            quantity_ordered=order.quantity_ordered,
        )
        return ReceiveResult(order=order, record=record, warehouse=warehouse)

    async def get_order(self, order_id: str) -> PurchaseOrder:
        order = await self._orders.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        return order

    async def list_orders(
        self,
        filters: PurchaseOrderFilters | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> OrderPage:
        """Filtered orders, newest first."""
        if page < 1:
            raise InvalidArgumentError("page", "must be at least 1", page)
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                "limit", f"must be between 1 and {MAX_PAGE_SIZE}", limit
            )
        orders, total = await self._orders.list_orders(
            filters, limit=limit, offset=(page - 1) * limit
        )
        return OrderPage(orders=orders, total=total, page=page, limit=limit)

    async def list_pending(self) -> list[PurchaseOrder]:
        return await self._orders.list_pending()

    async def list_overdue(self, now: datetime | None = None) -> list[PurchaseOrder]:
        return await self._orders.list_overdue(now or utcnow())

    async def get_stats(self) -> OrderStats:
        return await self._orders.get_stats()

    async def has_pending_order(self, product_id: str, warehouse_id: str) -> bool:
        return await self._orders.has_pending_order(product_id, warehouse_id)
