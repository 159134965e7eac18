"""
Threshold-based automatic reordering.

For every active stock record below its product's reorder threshold the
scanner orders enough to reach the threshold plus a buffer, limited by the
space left in the warehouse. Each record is handled on its own: a failure
becomes a skipped entry and the scan carries on.
"""

import math
from decimal import Decimal

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction
from stockflow.core.entities.reorder import (
    ReorderedItem,
    ReorderReport,
    SkippedItem,
    SkipReason,
)
from stockflow.core.entities.stock import ReorderCandidate
from stockflow.core.interfaces.stock_store import IStockStore
from stockflow.core.services.audit_notifier import AuditNotifier
from stockflow.core.services.purchase_orders import PurchaseOrderService
from stockflow.core.services.warehouse_capacity import WarehouseCapacityService

logger = get_logger(__name__)

AUTO_ORDER_NOTE = "Auto-generated order - stock below threshold"


class ReorderScanner:
    """Finds under-threshold stock and places purchase orders for it."""

    def __init__(
        self,
        stock_store: IStockStore,
        orders: PurchaseOrderService,
        warehouses: WarehouseCapacityService,
        audit: AuditNotifier | None = None,
        lead_time_days: int = 3,
        buffer_ratio: Decimal = Decimal("0.2"),
        min_order_ratio: Decimal = Decimal("0.1"),
    ) -> None:
        self._stock = stock_store
        self._orders = orders
        self._warehouses = warehouses
        self._audit = audit or AuditNotifier()
        self._lead_time_days = lead_time_days
        self._buffer_ratio = Decimal(buffer_ratio)
        self._min_order_ratio = Decimal(min_order_ratio)

    def target_quantity(self, threshold: int) -> int:
        """Threshold plus the buffer, rounded up."""
        return threshold + math.ceil(Decimal(threshold) * self._buffer_ratio)

    def is_below_minimum(self, quantity: int, threshold: int) -> bool:
        """Strictly below the smallest order worth placing."""
        return Decimal(quantity) < Decimal(threshold) * self._min_order_ratio

    async def scan(self) -> ReorderReport:
        """Run one scan over all eligible stock records."""
        candidates = await self._stock.list_reorder_candidates()
        logger.info("reorder_scan_started", candidates=len(candidates))

        report = ReorderReport()
        for candidate in candidates:
            try:
                outcome = await self._process(candidate)
            except Exception as e:
                logger.warning(
                    "reorder_item_failed",
                    product_id=candidate.product.id,
                    warehouse_id=candidate.warehouse.id,
                    error=str(e),
                    exc_info=True,
                )
                outcome = self._skip(candidate, SkipReason.ORDER_FAILED, str(e))

            if isinstance(outcome, SkippedItem):
                report.skipped.append(outcome)
            else:
                report.orders.append(outcome)

        logger.info(
            "reorder_scan_complete",
            orders_created=report.orders_created,
            skipped=len(report.skipped),
        )
        await self._audit.notify(
            AuditAction.REORDER_SCAN_COMPLETED,
            "reorder_scan",
            orders_created=report.orders_created,
            skipped=len(report.skipped),
        )
        return report

    async def _process(self, candidate: ReorderCandidate) -> ReorderedItem | SkippedItem:
        product = candidate.product
        warehouse = candidate.warehouse
        record = candidate.record
        threshold = product.reorder_threshold

        if await self._orders.has_pending_order(record.product_id, record.warehouse_id):
            return self._skip(candidate, SkipReason.PENDING_ORDER)

        available = await self._warehouses.reservable_capacity(record.warehouse_id)
        if available <= 0:
            return self._skip(candidate, SkipReason.FULL_CAPACITY)

        quantity = self.target_quantity(threshold) - record.quantity
        if quantity > available:
            quantity = available

        if self.is_below_minimum(quantity, threshold):
            return self._skip(
                candidate,
                SkipReason.INSUFFICIENT_CAPACITY,
                f"only {available} available",
            )

        order = await self._orders.create_order(
            product_id=record.product_id,
            supplier_id=candidate.supplier.id,
            warehouse_id=record.warehouse_id,
            quantity_ordered=quantity,
            notes=AUTO_ORDER_NOTE,
            lead_time_days=self._lead_time_days,
        )

        logger.info(
            "reorder_placed",
            order_id=order.id,
            product_id=record.product_id,
            warehouse_id=record.warehouse_id,
            quantity=quantity,
        )
        return ReorderedItem(
            order_id=order.id or "",
            product_id=record.product_id,
            product_name=product.name,
            warehouse_id=record.warehouse_id,
            warehouse_name=warehouse.name,
            supplier_id=order.supplier_id,
            supplier_name=candidate.supplier.name,
            current_stock=record.quantity,
            threshold=threshold,
            quantity_ordered=quantity,
        )

    @staticmethod
    def _skip(
        candidate: ReorderCandidate, reason: SkipReason, detail: str | None = None
    ) -> SkippedItem:
        return SkippedItem(
            product_id=candidate.record.product_id,
            product_name=candidate.product.name,
            warehouse_id=candidate.record.warehouse_id,
            reason=reason,
            detail=detail,
        )
