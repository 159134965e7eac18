"""Audit trail entities."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from stockflow.core.entities.timestamps import utcnow


class AuditAction(str, Enum):
    """Ledger and lifecycle events worth keeping a trail of."""

    STOCK_ADDED = "STOCK_ADDED"
    STOCK_REMOVED = "STOCK_REMOVED"
    STOCK_TRANSFERRED = "STOCK_TRANSFERRED"
    PURCHASE_ORDER_CREATED = "PURCHASE_ORDER_CREATED"
    PURCHASE_ORDER_UPDATED = "PURCHASE_ORDER_UPDATED"
    PURCHASE_ORDER_CANCELLED = "PURCHASE_ORDER_CANCELLED"
    PURCHASE_ORDER_RECEIVED = "PURCHASE_ORDER_RECEIVED"
    REORDER_SCAN_COMPLETED = "REORDER_SCAN_COMPLETED"
    WAREHOUSE_DEACTIVATED = "WAREHOUSE_DEACTIVATED"
    PRODUCT_DEACTIVATED = "PRODUCT_DEACTIVATED"


class AuditEvent(BaseModel):
    """Single audit trail entry."""

    id: int | None = None
    action: AuditAction
    resource: str
    resource_id: str | None = None
    actor: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
