"""Stock ledger endpoints: add, remove, transfer, reorder and levels."""

from fastapi import APIRouter, Depends, status

from stockflow.api.dependencies import get_scanner, get_stock
from stockflow.api.security import require_bearer_token
from stockflow.application.dto.requests import (
    AddStockRequest,
    RemoveStockRequest,
    TransferStockRequest,
)
from stockflow.application.dto.responses import (
    DATA_FETCHED,
    ApiResponse,
    ErrorResponse,
    ProductStockResponse,
    ReorderReportResponse,
    StockChangeResponse,
    StockLevelResponse,
    TransferResponse,
)
from stockflow.core.services import ReorderScanner, StockTransactionService

router = APIRouter(
    prefix="/api/stock",
    tags=["stock"],
    dependencies=[Depends(require_bearer_token)],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "/add",
    response_model=ApiResponse[StockChangeResponse],
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def add_stock(
    request: AddStockRequest,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[StockChangeResponse]:
    """Add stock to a warehouse, creating the stock record if needed."""
    result = await service.add_stock(
        request.product_id, request.warehouse_id, request.quantity
    )
    return ApiResponse(
        message=f"Successfully added {request.quantity} units to warehouse",
        data=StockChangeResponse.from_result(result),
    )


@router.post(
    "/remove",
    response_model=ApiResponse[StockChangeResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def remove_stock(
    request: RemoveStockRequest,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[StockChangeResponse]:
    """Remove stock from a warehouse."""
    result = await service.remove_stock(
        request.product_id, request.warehouse_id, request.quantity
    )
    return ApiResponse(
        message=f"Successfully removed {request.quantity} units from warehouse",
        data=StockChangeResponse.from_result(result),
    )


@router.post(
    "/transfer",
    response_model=ApiResponse[TransferResponse],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def transfer_stock(
    request: TransferStockRequest,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[TransferResponse]:
    """Move stock between two warehouses atomically."""
    result = await service.transfer_stock(
        request.product_id,
        request.from_warehouse_id,
        request.to_warehouse_id,
        request.quantity,
    )
    return ApiResponse(
        message=f"Successfully transferred {request.quantity} units between warehouses",
        data=TransferResponse.from_result(result),
    )


@router.post("/check-reorder", response_model=ApiResponse[ReorderReportResponse])
async def check_reorder(
    scanner: ReorderScanner = Depends(get_scanner),
) -> ApiResponse[ReorderReportResponse]:
    """Scan for under-threshold stock and place purchase orders."""
    report = await scanner.scan()
    return ApiResponse(
        message=(
            f"Reorder check completed. {report.orders_created} purchase orders created, "
            f"{len(report.skipped)} skipped."
        ),
        data=ReorderReportResponse.from_report(report),
    )


@router.get("/alerts", response_model=ApiResponse[list[StockLevelResponse]])
async def all_low_stock(
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[list[StockLevelResponse]]:
    """Every active stock record below its reorder threshold."""
    levels = await service.all_low_stock()
    return ApiResponse(
        message=DATA_FETCHED,
        data=[StockLevelResponse.from_entity(level) for level in levels],
    )


@router.get(
    "/warehouse/{warehouse_id}",
    response_model=ApiResponse[list[StockLevelResponse]],
    responses={404: {"model": ErrorResponse}},
)
async def warehouse_stock(
    warehouse_id: str,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[list[StockLevelResponse]]:
    levels = await service.warehouse_stock_levels(warehouse_id)
    return ApiResponse(
        message=DATA_FETCHED,
        data=[StockLevelResponse.from_entity(level) for level in levels],
    )


@router.get(
    "/warehouse/{warehouse_id}/alerts",
    response_model=ApiResponse[list[StockLevelResponse]],
    responses={404: {"model": ErrorResponse}},
)
async def warehouse_alerts(
    warehouse_id: str,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[list[StockLevelResponse]]:
    levels = await service.low_stock_alerts(warehouse_id)
    return ApiResponse(
        message=DATA_FETCHED,
        data=[StockLevelResponse.from_entity(level) for level in levels],
    )


@router.get(
    "/product/{product_id}",
    response_model=ApiResponse[ProductStockResponse],
    responses={404: {"model": ErrorResponse}},
)
async def product_stock(
    product_id: str,
    service: StockTransactionService = Depends(get_stock),
) -> ApiResponse[ProductStockResponse]:
    """Stock of a product in every warehouse, with the total."""
    stock = await service.product_stock(product_id)
    return ApiResponse(
        message=DATA_FETCHED,
        data=ProductStockResponse(
            product_id=stock.product_id,
            total_quantity=stock.total_quantity,
            warehouses=[StockLevelResponse.from_entity(level) for level in stock.levels],
        ),
    )
