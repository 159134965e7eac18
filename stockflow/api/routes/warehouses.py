"""Warehouse capacity endpoints."""

from fastapi import APIRouter, Depends, Query

from stockflow.api.dependencies import get_warehouses
from stockflow.api.security import require_bearer_token
from stockflow.application.dto.responses import (
    DATA_FETCHED,
    ApiResponse,
    CanAccommodateResponse,
    CapacityStatusResponse,
    ErrorResponse,
    WarehouseResponse,
)
from stockflow.core.services import WarehouseCapacityService

router = APIRouter(
    prefix="/api/warehouses",
    tags=["warehouses"],
    dependencies=[Depends(require_bearer_token)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("/{warehouse_id}/capacity", response_model=ApiResponse[CapacityStatusResponse])
async def capacity_status(
    warehouse_id: str,
    service: WarehouseCapacityService = Depends(get_warehouses),
) -> ApiResponse[CapacityStatusResponse]:
    """Capacity, occupancy, utilization and its band."""
    status = await service.capacity_status(warehouse_id)
    return ApiResponse(message=DATA_FETCHED, data=CapacityStatusResponse.from_entity(status))


@router.get(
    "/{warehouse_id}/can-accommodate",
    response_model=ApiResponse[CanAccommodateResponse],
)
async def can_accommodate(
    warehouse_id: str,
    quantity: int = Query(..., ge=1),
    service: WarehouseCapacityService = Depends(get_warehouses),
) -> ApiResponse[CanAccommodateResponse]:
    fits = await service.can_accommodate(warehouse_id, quantity)
    return ApiResponse(
        message=DATA_FETCHED,
        data=CanAccommodateResponse(
            warehouse_id=warehouse_id, quantity=quantity, can_accommodate=fits
        ),
    )


@router.post(
    "/{warehouse_id}/deactivate",
    response_model=ApiResponse[WarehouseResponse],
    responses={409: {"model": ErrorResponse}},
)
async def deactivate_warehouse(
    warehouse_id: str,
    service: WarehouseCapacityService = Depends(get_warehouses),
) -> ApiResponse[WarehouseResponse]:
    """Soft-delete an empty warehouse."""
    warehouse = await service.deactivate_warehouse(warehouse_id)
    return ApiResponse(
        message="Warehouse deactivated successfully",
        data=WarehouseResponse.from_entity(warehouse),
    )

