"""Purchase order lifecycle endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from stockflow.api.dependencies import get_orders
from stockflow.api.security import require_bearer_token
from stockflow.application.dto.requests import (
    CreatePurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from stockflow.application.dto.responses import (
    DATA_FETCHED,
    ApiResponse,
    ErrorResponse,
    OrderStatsResponse,
    PaginationMeta,
    PurchaseOrderResponse,
    ReceiveOrderResponse,
)
from stockflow.core.entities import OrderStatus, PurchaseOrderFilters
from stockflow.core.services import PurchaseOrderService

router = APIRouter(
    prefix="/api/purchase-orders",
    tags=["purchase-orders"],
    dependencies=[Depends(require_bearer_token)],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=ApiResponse[PurchaseOrderResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_purchase_order(
    request: CreatePurchaseOrderRequest,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[PurchaseOrderResponse]:
    order = await service.create_order(
        product_id=request.product_id,
        supplier_id=request.supplier_id,
        warehouse_id=request.warehouse_id,
        quantity_ordered=request.quantity_ordered,
        notes=request.notes,
        order_date=request.order_date,
        expected_arrival_date=request.expected_arrival_date,
        lead_time_days=request.lead_time_days,
    )
    return ApiResponse(
        message="Purchase order created successfully",
        data=PurchaseOrderResponse.from_entity(order),
    )


@router.get("", response_model=ApiResponse[list[PurchaseOrderResponse]])
async def list_purchase_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    order_status: OrderStatus | None = Query(default=None, alias="status"),
    product_id: str | None = None,
    warehouse_id: str | None = None,
    supplier_id: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[list[PurchaseOrderResponse]]:
    """Paginated order listing, newest first."""
    filters = PurchaseOrderFilters(
        status=order_status,
        product_id=product_id,
        warehouse_id=warehouse_id,
        supplier_id=supplier_id,
        order_date_from=start_date,
        order_date_to=end_date,
    )
    result = await service.list_orders(filters, page=page, limit=limit)
    return ApiResponse(
        message=DATA_FETCHED,
        data=[PurchaseOrderResponse.from_entity(order) for order in result.orders],
        pagination=PaginationMeta.from_page(result),
    )


@router.get("/stats", response_model=ApiResponse[OrderStatsResponse])
async def order_stats(
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[OrderStatsResponse]:
    stats = await service.get_stats()
    return ApiResponse(message=DATA_FETCHED, data=OrderStatsResponse.from_entity(stats))


@router.get("/pending", response_model=ApiResponse[list[PurchaseOrderResponse]])
async def pending_orders(
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[list[PurchaseOrderResponse]]:
    orders = await service.list_pending()
    return ApiResponse(
        message=DATA_FETCHED,
        data=[PurchaseOrderResponse.from_entity(order) for order in orders],
    )


@router.get("/overdue", response_model=ApiResponse[list[PurchaseOrderResponse]])
async def overdue_orders(
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[list[PurchaseOrderResponse]]:
    orders = await service.list_overdue()
    return ApiResponse(
        message=DATA_FETCHED,
        data=[PurchaseOrderResponse.from_entity(order) for order in orders],
    )


@router.get(
    "/{order_id}",
    response_model=ApiResponse[PurchaseOrderResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase_order(
    order_id: str,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[PurchaseOrderResponse]:
    order = await service.get_order(order_id)
    return ApiResponse(message=DATA_FETCHED, data=PurchaseOrderResponse.from_entity(order))


@router.put(
    "/{order_id}",
    response_model=ApiResponse[PurchaseOrderResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_purchase_order(
    order_id: str,
    request: UpdatePurchaseOrderRequest,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[PurchaseOrderResponse]:
    """Change quantity, expected arrival or notes of a PENDING order."""
    order = await service.update_order(
        order_id,
        quantity_ordered=request.quantity_ordered,
        expected_arrival_date=request.expected_arrival_date,
        notes=request.notes,
    )
    return ApiResponse(
        message="Purchase order updated successfully",
        data=PurchaseOrderResponse.from_entity(order),
    )


@router.post(
    "/{order_id}/cancel",
    response_model=ApiResponse[PurchaseOrderResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def cancel_purchase_order(
    order_id: str,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[PurchaseOrderResponse]:
    order = await service.cancel_order(order_id)
    return ApiResponse(
        message="Purchase order cancelled successfully",
        data=PurchaseOrderResponse.from_entity(order),
    )


@router.post(
    "/{order_id}/receive",
    response_model=ApiResponse[ReceiveOrderResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def receive_purchase_order(
    order_id: str,
    service: PurchaseOrderService = Depends(get_orders),
) -> ApiResponse[ReceiveOrderResponse]:
    """Book a PENDING order's quantity into stock."""
    result = await service.receive_order(order_id)
    return ApiResponse(
        message=(
            "Purchase order received successfully. "
            f"Added {result.order.quantity_ordered} units to warehouse."
        ),
        data=ReceiveOrderResponse.from_result(result),
    )
