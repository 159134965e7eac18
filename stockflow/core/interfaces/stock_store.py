"""Abstract interface for stock record queries."""

from abc import ABC, abstractmethod

from stockflow.core.entities.stock import ReorderCandidate, StockLevel, StockRecord


class IStockStore(ABC):
    """
    Read side of the stock ledger.

    Mutations go through ILedgerTransaction so they share a transaction
    with the warehouse occupancy they affect.
    """

    @abstractmethod
    async def get_record(self, product_id: str, warehouse_id: str) -> StockRecord | None:
        """Get the stock record for a product in a warehouse."""
        pass

    @abstractmethod
    async def list_by_warehouse(self, warehouse_id: str) -> list[StockLevel]:
        """Stock levels held in a warehouse, ordered by product name."""
        pass

    @abstractmethod
    async def list_by_product(self, product_id: str) -> list[StockLevel]:
        """Stock levels of a product in every warehouse, ordered by warehouse name."""
        pass

    @abstractmethod
    async def list_below_threshold(
        self, warehouse_id: str | None = None
    ) -> list[StockLevel]:
        """Active records under their product's reorder threshold."""
        pass

    @abstractmethod
    async def list_reorder_candidates(self) -> list[ReorderCandidate]:
        """
        Under-threshold records whose product, warehouse and default
        supplier are all active, ordered by product id then warehouse id.
        """
        pass

    @abstractmethod
    async def total_quantity_by_product(self, product_id: str) -> int:
        """Units of a product across all warehouses."""
        pass
