"""Abstract interface for product and supplier storage."""

from abc import ABC, abstractmethod

from stockflow.core.entities.catalog import Product, Supplier


class ICatalogStore(ABC):
    """Interface for catalog persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a supplier. Raises ConflictError on a duplicate name."""
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product. Raises ConflictError on a duplicate name."""
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def deactivate_product(self, product_id: str) -> bool:
        """
        Mark a product inactive if no warehouse holds any of it.

        Returns False when stock remains.
        """
        pass
