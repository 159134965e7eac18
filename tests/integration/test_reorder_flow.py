"""Integration tests for the reorder scan against SQLite."""

from stockflow.application.services import (
    get_purchase_order_service,
    get_reorder_scanner,
    get_stock_service,
)
from stockflow.core.entities import OrderStatus, SkipReason, Warehouse
from stockflow.core.services.reorder_scanner import AUTO_ORDER_NOTE
from stockflow.infrastructure.storage.sqlite import get_warehouse_store


async def _warehouse_with_stock(seed, name: str, capacity: int, quantity: int) -> Warehouse:
    warehouse = await (await get_warehouse_store()).create_warehouse(
        Warehouse(name=name, location="Setif", capacity=capacity)
    )
    stock = await get_stock_service()
    await stock.add_stock(seed.product.id, warehouse.id, quantity)
    return warehouse


class TestReorderScan:
    async def test_orders_threshold_plus_buffer(self, seed):
        stock = await get_stock_service()
        await stock.add_stock(seed.product.id, seed.main.id, 5)
        scanner = await get_reorder_scanner()

        report = await scanner.scan()

        assert report.orders_created == 1
        item = report.orders[0]
        assert item.quantity_ordered == 19
        order = await (await get_purchase_order_service()).get_order(item.order_id)
        assert order.status is OrderStatus.PENDING
        assert order.notes == AUTO_ORDER_NOTE
        assert order.supplier_id == seed.supplier.id

    async def test_clamped_order_at_exact_minimum(self, seed):
        tiny = await _warehouse_with_stock(seed, "Tiny", capacity=7, quantity=5)
        scanner = await get_reorder_scanner()

        report = await scanner.scan()

        assert [(i.warehouse_id, i.quantity_ordered) for i in report.orders] == [(tiny.id, 2)]

    async def test_below_minimum_and_full(self, seed):
        await _warehouse_with_stock(seed, "Cramped", capacity=6, quantity=5)
        await _warehouse_with_stock(seed, "Packed", capacity=5, quantity=5)
        scanner = await get_reorder_scanner()

        report = await scanner.scan()

        assert sorted(s.reason for s in report.skipped) == sorted(
            [SkipReason.INSUFFICIENT_CAPACITY, SkipReason.FULL_CAPACITY]
        )
        insufficient = next(
            s for s in report.skipped if s.reason is SkipReason.INSUFFICIENT_CAPACITY
        )
        assert insufficient.detail == "only 1 available"

    async def test_second_scan_skips_pending(self, seed):
        stock = await get_stock_service()
        await stock.add_stock(seed.product.id, seed.main.id, 5)
        scanner = await get_reorder_scanner()
        await scanner.scan()

        report = await scanner.scan()

        assert report.orders_created == 0
        assert [s.reason for s in report.skipped] == [SkipReason.PENDING_ORDER]

    async def test_stock_at_threshold_is_not_scanned(self, seed):
        stock = await get_stock_service()
        await stock.add_stock(seed.product.id, seed.main.id, 20)
        scanner = await get_reorder_scanner()

        report = await scanner.scan()

        assert report.orders == [] and report.skipped == []
