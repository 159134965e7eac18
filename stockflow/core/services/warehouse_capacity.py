"""
Warehouse capacity accounting.

All reads reflect the warehouse at call time. Nothing here reserves or
locks capacity; the ledger re-checks it when stock actually moves.
"""

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction
from stockflow.core.entities.warehouse import CapacityStatus, Warehouse
from stockflow.core.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    WarehouseNotFoundError,
)
from stockflow.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockflow.core.interfaces.warehouse_store import IWarehouseStore
from stockflow.core.services.audit_notifier import AuditNotifier

logger = get_logger(__name__)


class WarehouseCapacityService:
    """Capacity checks and warehouse soft delete."""

    def __init__(
        self,
        warehouse_store: IWarehouseStore,
        order_store: IPurchaseOrderStore,
        reserve_pending_capacity: bool = True,
        audit: AuditNotifier | None = None,
    ) -> None:
        self._warehouses = warehouse_store
        self._orders = order_store
        self._reserve_pending = reserve_pending_capacity
        self._audit = audit or AuditNotifier()

    async def get_warehouse(self, warehouse_id: str) -> Warehouse:
        warehouse = await self._warehouses.get_warehouse(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse

    async def exists(self, warehouse_id: str) -> bool:
        return await self._warehouses.get_warehouse(warehouse_id) is not None

    async def check_capacity(self, warehouse_id: str) -> int:
        """Units the warehouse can still take."""
        warehouse = await self.get_warehouse(warehouse_id)
        return warehouse.available_capacity

    async def can_accommodate(self, warehouse_id: str, quantity: int) -> bool:
        if quantity <= 0:
            raise InvalidArgumentError("quantity", "must be a positive integer", quantity)
        warehouse = await self.get_warehouse(warehouse_id)
        return warehouse.can_accommodate(quantity)

    async def capacity_status(self, warehouse_id: str) -> CapacityStatus:
        warehouse = await self.get_warehouse(warehouse_id)
        return CapacityStatus.from_warehouse(warehouse)

    async def reservable_capacity(self, warehouse_id: str) -> int:
        """
        Capacity left for new purchase orders.

        With pending reservation on, units on PENDING orders for the
        warehouse count as taken even though they have not arrived.
        """
        warehouse = await self.get_warehouse(warehouse_id)
        available = warehouse.available_capacity
        if self._reserve_pending:
            available -= await self._orders.pending_quantity(warehouse_id)
        return max(available, 0)

    async def deactivate_warehouse(self, warehouse_id: str) -> Warehouse:
        """Soft-delete an empty warehouse."""
        warehouse = await self.get_warehouse(warehouse_id)

        if not await self._warehouses.deactivate_warehouse(warehouse_id):
            current = await self.get_warehouse(warehouse_id)
            raise InvalidStateError(
                "warehouse",
                warehouse_id,
                f"OCCUPIED ({current.current_occupancy} units)",
                "deactivate",
            )

        warehouse.is_active = False
        logger.info("warehouse_deactivated", warehouse_id=warehouse_id)
        await self._audit.notify(
            AuditAction.WAREHOUSE_DEACTIVATED, "warehouse", warehouse_id
        )
        return warehouse
