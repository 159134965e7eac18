"""Abstract interface for warehouse storage."""

from abc import ABC, abstractmethod

from stockflow.core.entities.warehouse import Warehouse


class IWarehouseStore(ABC):
    """Interface for warehouse persistence."""

    @abstractmethod
    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        """Create a warehouse. Raises ConflictError on a duplicate name."""
        pass

    @abstractmethod
    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        """Get warehouse by ID."""
        pass

    @abstractmethod
    async def list_warehouses(self, active_only: bool = True) -> list[Warehouse]:
        """List warehouses ordered by name."""
        pass

    @abstractmethod
    async def deactivate_warehouse(self, warehouse_id: str) -> bool:
        """
        Mark a warehouse inactive if it is empty.

        Returns False when the warehouse still has occupancy.
        """
        pass
