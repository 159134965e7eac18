"""Tests for the SQLite catalog, warehouse, stock, order and audit stores."""

from datetime import UTC, datetime, timedelta

import pytest

from stockflow.core.entities import (
    AuditAction,
    AuditEvent,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderFilters,
    Warehouse,
)
from stockflow.core.exceptions import ConflictError
from stockflow.infrastructure.storage.sqlite import (
    get_audit_store,
    get_catalog_store,
    get_ledger,
    get_purchase_order_store,
    get_stock_store,
    get_warehouse_store,
)


async def _put_stock(product_id: str, warehouse_id: str, quantity: int) -> None:
    ledger = await get_ledger()
    async with ledger.atomic() as tx:
        await tx.increment_occupancy(warehouse_id, quantity)
        await tx.increment_stock(product_id, warehouse_id, quantity)


async def _insert_order(seed, quantity: int = 10, days_ago: int = 0) -> PurchaseOrder:
    ordered = datetime.now(UTC) - timedelta(days=days_ago)
    ledger = await get_ledger()
    async with ledger.atomic() as tx:
        return await tx.insert_purchase_order(
            PurchaseOrder(
                product_id=seed.product.id,
                supplier_id=seed.supplier.id,
                warehouse_id=seed.main.id,
                quantity_ordered=quantity,
                order_date=ordered,
                expected_arrival_date=ordered + timedelta(days=3),
            )
        )


class TestCatalogStore:
    async def test_round_trip(self, seed):
        store = await get_catalog_store()

        product = await store.get_product(seed.product.id)
        supplier = await store.get_supplier(seed.supplier.id)

        assert product.name == "Cable 3x2.5mm"
        assert product.reorder_threshold == 20
        assert product.default_supplier_id == seed.supplier.id
        assert supplier.contact_info == "orders@acme.test"
        assert await store.get_product("missing") is None

    async def test_duplicate_supplier_name(self, seed):
        store = await get_catalog_store()
        with pytest.raises(ConflictError):
            await store.create_supplier(seed.supplier.model_copy(update={"id": None}))

    async def test_deactivate_product_only_when_unstocked(self, seed):
        store = await get_catalog_store()
        await _put_stock(seed.product.id, seed.main.id, 3)

        assert await store.deactivate_product(seed.product.id) is False


class TestWarehouseStore:
    async def test_list_active_only(self, seed):
        store = await get_warehouse_store()
        assert await store.deactivate_warehouse(seed.overflow.id)

        active = await store.list_warehouses()
        everything = await store.list_warehouses(active_only=False)

        assert [w.name for w in active] == ["Main"]
        assert [w.name for w in everything] == ["Main", "Overflow"]

    async def test_duplicate_name(self, seed):
        store = await get_warehouse_store()
        with pytest.raises(ConflictError):
            await store.create_warehouse(
                Warehouse(name="Main", location="Annaba", capacity=10)
            )


class TestStockStore:
    async def test_levels_carry_names(self, seed):
        await _put_stock(seed.product.id, seed.main.id, 5)
        await _put_stock(seed.product.id, seed.overflow.id, 30)
        store = await get_stock_store()

        by_warehouse = await store.list_by_warehouse(seed.main.id)
        by_product = await store.list_by_product(seed.product.id)
        below = await store.list_below_threshold()
        below_main = await store.list_below_threshold(seed.main.id)

        assert by_warehouse[0].warehouse_name == "Main"
        assert by_warehouse[0].product_name == "Cable 3x2.5mm"
        assert {level.record.quantity for level in by_product} == {5, 30}
        assert [level.record.warehouse_id for level in below] == [seed.main.id]
        assert below_main[0].below_threshold
        assert await store.total_quantity_by_product(seed.product.id) == 35

    async def test_reorder_candidates_skip_inactive(self, seed):
        await _put_stock(seed.product.id, seed.main.id, 5)
        store = await get_stock_store()

        candidates = await store.list_reorder_candidates()

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.supplier.id == seed.supplier.id
        assert candidate.warehouse.current_occupancy == 5

        warehouses = await get_warehouse_store()
        await warehouses.deactivate_warehouse(seed.overflow.id)
        await _put_stock(seed.product.id, seed.overflow.id, 1)

        candidates = await store.list_reorder_candidates()
        assert [c.record.warehouse_id for c in candidates] == [seed.main.id]


class TestPurchaseOrderStore:
    async def test_filters_and_pagination(self, seed):
        for days_ago in (2, 1, 0):
            await _insert_order(seed, quantity=10 + days_ago, days_ago=days_ago)
        store = await get_purchase_order_store()

        page, total = await store.list_orders(limit=2, offset=0)
        rest, _ = await store.list_orders(limit=2, offset=2)
        filtered, filtered_total = await store.list_orders(
            PurchaseOrderFilters(
                status=OrderStatus.PENDING,
                order_date_from=datetime.now(UTC) - timedelta(days=1, hours=1),
            )
        )

        assert total == 3
        assert [o.quantity_ordered for o in page] == [10, 11]
        assert [o.quantity_ordered for o in rest] == [12]
        assert filtered_total == 2

    async def test_pending_helpers(self, seed):
        await _insert_order(seed, quantity=7, days_ago=5)
        store = await get_purchase_order_store()

        assert await store.has_pending_order(seed.product.id, seed.main.id)
        assert not await store.has_pending_order(seed.product.id, seed.overflow.id)
        assert await store.pending_quantity(seed.main.id) == 7
        assert len(await store.list_overdue(datetime.now(UTC))) == 1
        stats = await store.get_stats()
        assert (stats.total, stats.pending, stats.received) == (1, 1, 0)


class TestAuditStore:
    async def test_record_and_filter(self, db):
        store = await get_audit_store()
        await store.record(
            AuditEvent(
                action=AuditAction.STOCK_ADDED,
                resource="stock",
                resource_id="s-1",
                actor="token:abc",
                metadata={"quantity": 5},
            )
        )
        await store.record(
            AuditEvent(action=AuditAction.REORDER_SCAN_COMPLETED, resource="reorder_scan")
        )

        latest = await store.list_events(limit=1)
        stock_events = await store.list_events(resource="stock")

        assert latest[0].action is AuditAction.REORDER_SCAN_COMPLETED
        assert stock_events[0].metadata == {"quantity": 5}
        assert stock_events[0].actor == "token:abc"
