"""Tests for the purchase order state machine."""

from datetime import UTC, datetime, timedelta

import pytest

from stockflow.core.entities import ALLOWED_TRANSITIONS, OrderStatus, PurchaseOrder
from stockflow.core.exceptions import InvalidStateError


@pytest.fixture
def order() -> PurchaseOrder:
    ordered = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
    return PurchaseOrder(
        id="po-1",
        product_id="p-1",
        supplier_id="s-1",
        warehouse_id="w-1",
        quantity_ordered=10,
        order_date=ordered,
        expected_arrival_date=ordered + timedelta(days=3),
    )


class TestTransitions:
    def test_terminal_states_have_no_exits(self):
        assert ALLOWED_TRANSITIONS[OrderStatus.RECEIVED] == frozenset()
        assert ALLOWED_TRANSITIONS[OrderStatus.CANCELLED] == frozenset()
        assert OrderStatus.RECEIVED.is_terminal
        assert not OrderStatus.PENDING.is_terminal

    def test_receive_stamps_arrival(self, order: PurchaseOrder):
        at = datetime(2024, 3, 4, 12, 0, tzinfo=UTC)
        order.transition_to(OrderStatus.RECEIVED, at=at)
        assert order.status is OrderStatus.RECEIVED
        assert order.actual_arrival_date == at
        assert order.updated_at == at

    def test_cancel_leaves_arrival_empty(self, order: PurchaseOrder):
        order.transition_to(OrderStatus.CANCELLED)
        assert order.status is OrderStatus.CANCELLED
        assert order.actual_arrival_date is None

    @pytest.mark.parametrize("terminal", [OrderStatus.RECEIVED, OrderStatus.CANCELLED])
    def test_cannot_receive_from_terminal(self, order: PurchaseOrder, terminal: OrderStatus):
        order.status = terminal
        with pytest.raises(InvalidStateError) as exc_info:
            order.transition_to(OrderStatus.RECEIVED)
        assert exc_info.value.details["current"] == terminal.value
        assert exc_info.value.details["operation"] == "receive"

    def test_ensure_pending(self, order: PurchaseOrder):
        order.ensure_pending("update")
        order.status = OrderStatus.CANCELLED
        with pytest.raises(InvalidStateError):
            order.ensure_pending("update")


class TestOverdue:
    def test_overdue_after_expected_date(self, order: PurchaseOrder):
        assert not order.is_overdue(order.expected_arrival_date - timedelta(hours=1))
        assert order.is_overdue(order.expected_arrival_date + timedelta(hours=1))

    def test_received_order_never_overdue(self, order: PurchaseOrder):
        order.transition_to(OrderStatus.RECEIVED)
        assert not order.is_overdue(order.expected_arrival_date + timedelta(days=30))

    def test_naive_dates_are_treated_as_utc(self):
        order = PurchaseOrder(
            product_id="p-1",
            supplier_id="s-1",
            warehouse_id="w-1",
            quantity_ordered=5,
            order_date=datetime(2024, 3, 1),
            expected_arrival_date=datetime(2024, 3, 4),
        )
        order.expected_arrival_date = datetime(2024, 3, 10)

        assert order.order_date.tzinfo is UTC
        assert order.expected_arrival_date == datetime(2024, 3, 10, tzinfo=UTC)
        assert order.is_overdue(datetime(2024, 3, 11, tzinfo=UTC))
