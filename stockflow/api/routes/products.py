"""Product lifecycle endpoints."""

from fastapi import APIRouter, Depends

from stockflow.api.dependencies import get_catalog
from stockflow.api.security import require_bearer_token
from stockflow.application.dto.responses import ApiResponse, ErrorResponse, ProductResponse
from stockflow.core.services import CatalogService

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=[Depends(require_bearer_token)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post(
    "/{product_id}/deactivate",
    response_model=ApiResponse[ProductResponse],
    responses={409: {"model": ErrorResponse}},
)
async def deactivate_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog),
) -> ApiResponse[ProductResponse]:
    """Soft-delete a product no warehouse holds any more."""
    product = await service.deactivate_product(product_id)
    return ApiResponse(
        message="Product deactivated successfully",
        data=ProductResponse.from_entity(product),
    )
