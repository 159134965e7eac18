"""Product and supplier lookups used as existence validators."""

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction
from stockflow.core.entities.catalog import Product, Supplier
from stockflow.core.exceptions import (
    InvalidStateError,
    ProductNotFoundError,
    SupplierNotFoundError,
)
from stockflow.core.interfaces.catalog_store import ICatalogStore
from stockflow.core.interfaces.stock_store import IStockStore
from stockflow.core.services.audit_notifier import AuditNotifier

logger = get_logger(__name__)


class CatalogService:
    """Catalog reads plus product soft delete."""

    def __init__(
        self,
        catalog_store: ICatalogStore,
        stock_store: IStockStore,
        audit: AuditNotifier | None = None,
    ) -> None:
        self._catalog = catalog_store
        self._stock = stock_store
        self._audit = audit or AuditNotifier()

    async def get_product(self, product_id: str) -> Product:
        product = await self._catalog.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def product_exists(self, product_id: str) -> bool:
        return await self._catalog.get_product(product_id) is not None

    async def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = await self._catalog.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    async def supplier_exists(self, supplier_id: str) -> bool:
        return await self._catalog.get_supplier(supplier_id) is not None

    async def deactivate_product(self, product_id: str) -> Product:
        """Soft-delete a product; only allowed once no warehouse holds any."""
        product = await self.get_product(product_id)

        if not await self._catalog.deactivate_product(product_id):
            total = await self._stock.total_quantity_by_product(product_id)
            raise InvalidStateError(
                "product", product_id, f"STOCKED ({total} units)", "deactivate"
            )

        product.is_active = False
        logger.info("product_deactivated", product_id=product_id)
        await self._audit.notify(AuditAction.PRODUCT_DEACTIVATED, "product", product_id)
        return product
