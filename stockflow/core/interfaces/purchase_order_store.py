"""Abstract interface for purchase order queries."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockflow.core.entities.purchase_order import (
    OrderStats,
    PurchaseOrder,
    PurchaseOrderFilters,
)


class IPurchaseOrderStore(ABC):
    """Read side of the purchase order lifecycle."""

    @abstractmethod
    async def get_order(self, order_id: str) -> PurchaseOrder | None:
        """Get purchase order by ID."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        filters: PurchaseOrderFilters | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[PurchaseOrder], int]:
        """Orders matching the filters, newest first, plus the total match count."""
        pass

    @abstractmethod
    async def list_pending(self) -> list[PurchaseOrder]:
        """PENDING orders by expected arrival date."""
        pass

    @abstractmethod
    async def list_overdue(self, now: datetime) -> list[PurchaseOrder]:
        """PENDING orders whose expected arrival date is before ``now``."""
        pass

    @abstractmethod
    async def get_stats(self) -> OrderStats:
        """Order counts by status."""
        pass

    @abstractmethod
    async def has_pending_order(self, product_id: str, warehouse_id: str) -> bool:
        """Whether a PENDING order exists for the pair."""
        pass

    @abstractmethod
    async def pending_quantity(self, warehouse_id: str) -> int:
        """Units on PENDING orders bound for a warehouse."""
        pass
