"""Unit tests for ReorderScanner with mocked collaborators."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from stockflow.core.entities import (
    AuditAction,
    Product,
    PurchaseOrder,
    ReorderCandidate,
    SkipReason,
    StockRecord,
    Supplier,
    Warehouse,
)
from stockflow.core.services import ReorderScanner
from stockflow.core.services.reorder_scanner import AUTO_ORDER_NOTE


def _candidate(
    quantity: int = 5, threshold: int = 20, product_id: str = "p-1"
) -> ReorderCandidate:
    return ReorderCandidate(
        record=StockRecord(
            id=f"s-{product_id}", product_id=product_id, warehouse_id="w-1", quantity=quantity
        ),
        product=Product(
            id=product_id,
            name=f"Product {product_id}",
            reorder_threshold=threshold,
            default_supplier_id="s-1",
        ),
        warehouse=Warehouse(id="w-1", name="Main", location="Algiers", capacity=1000),
        supplier=Supplier(id="s-1", name="Acme Supply"),
    )


def _order(**kwargs) -> PurchaseOrder:
    now = datetime.now(UTC)
    return PurchaseOrder(
        id="po-1",
        product_id=kwargs["product_id"],
        supplier_id=kwargs["supplier_id"],
        warehouse_id=kwargs["warehouse_id"],
        quantity_ordered=kwargs["quantity_ordered"],
        order_date=now,
        expected_arrival_date=now + timedelta(days=kwargs["lead_time_days"]),
        notes=kwargs["notes"],
    )


@pytest.fixture
def stock_store():
    return AsyncMock()


@pytest.fixture
def orders():
    service = AsyncMock()
    service.has_pending_order.return_value = False
    service.create_order.side_effect = _order
    return service


@pytest.fixture
def warehouses():
    service = AsyncMock()
    service.reservable_capacity.return_value = 100
    return service


@pytest.fixture
def audit():
    return AsyncMock()


@pytest.fixture
def scanner(stock_store, orders, warehouses, audit) -> ReorderScanner:
    return ReorderScanner(
        stock_store=stock_store, orders=orders, warehouses=warehouses, audit=audit
    )


class TestOrderSizing:
    def test_target_adds_rounded_up_buffer(self, scanner: ReorderScanner):
        assert scanner.target_quantity(20) == 24
        assert scanner.target_quantity(7) == 9
        assert scanner.target_quantity(0) == 0

    def test_minimum_is_strict(self, scanner: ReorderScanner):
        assert not scanner.is_below_minimum(2, 20)
        assert scanner.is_below_minimum(1, 20)


class TestScan:
    async def test_orders_up_to_target(self, scanner, stock_store, orders):
        stock_store.list_reorder_candidates.return_value = [_candidate(quantity=5)]

        report = await scanner.scan()

        assert report.orders_created == 1
        assert report.skipped == []
        item = report.orders[0]
        assert item.quantity_ordered == 19
        assert item.current_stock == 5
        assert item.threshold == 20
        assert item.supplier_name == "Acme Supply"
        orders.create_order.assert_awaited_once_with(
            product_id="p-1",
            supplier_id="s-1",
            warehouse_id="w-1",
            quantity_ordered=19,
            notes=AUTO_ORDER_NOTE,
            lead_time_days=3,
        )

    async def test_clamps_to_available_capacity(self, scanner, stock_store, warehouses):
        stock_store.list_reorder_candidates.return_value = [_candidate(quantity=5)]
        warehouses.reservable_capacity.return_value = 2

        report = await scanner.scan()

        assert report.orders[0].quantity_ordered == 2

    async def test_skips_when_clamped_below_minimum(
        self, scanner, stock_store, warehouses, orders
    ):
        stock_store.list_reorder_candidates.return_value = [_candidate(quantity=5)]
        warehouses.reservable_capacity.return_value = 1

        report = await scanner.scan()

        assert report.orders_created == 0
        skipped = report.skipped[0]
        assert skipped.reason is SkipReason.INSUFFICIENT_CAPACITY
        assert skipped.detail == "only 1 available"
        orders.create_order.assert_not_awaited()

    async def test_skips_full_warehouse(self, scanner, stock_store, warehouses):
        stock_store.list_reorder_candidates.return_value = [_candidate()]
        warehouses.reservable_capacity.return_value = 0

        report = await scanner.scan()

        assert report.skipped[0].reason is SkipReason.FULL_CAPACITY

    async def test_skips_pending_order(self, scanner, stock_store, orders, warehouses):
        stock_store.list_reorder_candidates.return_value = [_candidate()]
        orders.has_pending_order.return_value = True

        report = await scanner.scan()

        assert report.skipped[0].reason is SkipReason.PENDING_ORDER
        warehouses.reservable_capacity.assert_not_awaited()

    async def test_failure_is_isolated(self, scanner, stock_store, orders):
        stock_store.list_reorder_candidates.return_value = [
            _candidate(product_id="p-1"),
            _candidate(product_id="p-2"),
        ]
        orders.create_order.side_effect = [
            RuntimeError("database is locked"),
            _order(
                product_id="p-2",
                supplier_id="s-1",
                warehouse_id="w-1",
                quantity_ordered=19,
                lead_time_days=3,
                notes=AUTO_ORDER_NOTE,
            ),
        ]

        report = await scanner.scan()

        assert report.orders_created == 1
        assert report.orders[0].product_id == "p-2"
        assert report.skipped[0].product_id == "p-1"
        assert report.skipped[0].reason is SkipReason.ORDER_FAILED
        assert report.skipped[0].detail == "database is locked"

    async def test_reports_scan_to_audit(self, scanner, stock_store, audit):
        stock_store.list_reorder_candidates.return_value = []

        report = await scanner.scan()

        assert report.orders_created == 0
        audit.notify.assert_awaited_once_with(
            AuditAction.REORDER_SCAN_COMPLETED,
            "reorder_scan",
            orders_created=0,
            skipped=0,
        )
