"""Purchase order entity and its lifecycle state machine."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stockflow.core.entities.timestamps import ensure_utc, utcnow
from stockflow.core.exceptions import InvalidStateError


class OrderStatus(str, Enum):
    """Purchase order states. RECEIVED and CANCELLED are terminal."""

    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


# status -> statuses reachable from it
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.RECEIVED, OrderStatus.CANCELLED}),
    OrderStatus.RECEIVED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_OPERATION_BY_TARGET = {
    OrderStatus.RECEIVED: "receive",
    OrderStatus.CANCELLED: "cancel",
}


class PurchaseOrder(BaseModel):
    """Order for stock from a supplier, delivered to one warehouse."""

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None
    product_id: str
    supplier_id: str
    warehouse_id: str
    quantity_ordered: int = Field(..., gt=0)
    order_date: datetime = Field(default_factory=utcnow)
    expected_arrival_date: datetime
    actual_arrival_date: datetime | None = None
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator(
        "order_date",
        "expected_arrival_date",
        "actual_arrival_date",
        "created_at",
        "updated_at",
        mode="after",
    )
    @classmethod
    def _naive_is_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @property
    def is_pending(self) -> bool:
        return self.status is OrderStatus.PENDING

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Still pending after its expected arrival date."""
        return self.is_pending and self.expected_arrival_date < (now or utcnow())

    def ensure_pending(self, operation: str) -> None:
        """Raise InvalidStateError unless the order can still be changed."""
        if not self.is_pending:
            raise InvalidStateError(
                "purchase_order", self.id or "", self.status.value, operation
            )

    def transition_to(self, target: OrderStatus, at: datetime | None = None) -> None:
        """Move to ``target``; receiving stamps the actual arrival date."""
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateError(
                "purchase_order",
                self.id or "",
                self.status.value,
                _OPERATION_BY_TARGET.get(target, f"move to {target.value}"),
            )
        now = at or utcnow()
        self.status = target
        if target is OrderStatus.RECEIVED:
            self.actual_arrival_date = now
        self.updated_at = now


class PurchaseOrderFilters(BaseModel):
    """Listing filters; unset fields do not filter."""

    status: OrderStatus | None = None
    product_id: str | None = None
    warehouse_id: str | None = None
    supplier_id: str | None = None
    order_date_from: datetime | None = None
    order_date_to: datetime | None = None


class OrderStats(BaseModel):
    """Order counts by status."""

    total: int = 0
    pending: int = 0
    received: int = 0
    cancelled: int = 0
