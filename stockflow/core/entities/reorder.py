"""Reorder scan report entities."""

from enum import Enum

from pydantic import BaseModel, Field


class SkipReason(str, Enum):
    """Why the scanner did not place an order for a record."""

    PENDING_ORDER = "pending order exists"
    FULL_CAPACITY = "warehouse at full capacity"
    INSUFFICIENT_CAPACITY = "insufficient capacity"
    ORDER_FAILED = "order creation failed"


class ReorderedItem(BaseModel):
    """Purchase order placed by the scanner."""

    order_id: str
    product_id: str
    product_name: str
    warehouse_id: str
    warehouse_name: str
    supplier_id: str
    supplier_name: str
    current_stock: int
    threshold: int
    quantity_ordered: int


class SkippedItem(BaseModel):
    """Under-threshold record the scanner left alone."""

    product_id: str
    product_name: str
    warehouse_id: str
    reason: SkipReason
    detail: str | None = None


class ReorderReport(BaseModel):
    """Outcome of one scan. Partial success is normal."""

    orders: list[ReorderedItem] = Field(default_factory=list)
    skipped: list[SkippedItem] = Field(default_factory=list)

    @property
    def orders_created(self) -> int:
        return len(self.orders)
