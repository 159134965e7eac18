"""
Error handling middleware.

Standardizes all API error responses to the failure envelope:
- success: always false
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action

Domain exceptions carry an ErrorKind; this module is the only place
where a kind becomes an HTTP status.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockflow.application.dto.responses import ErrorResponse
from stockflow.config import get_logger
from stockflow.core.exceptions import ErrorKind, StockflowError

logger = get_logger(__name__)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID.",
    "WAREHOUSE_NOT_FOUND": "Check the warehouse ID.",
    "PURCHASE_ORDER_NOT_FOUND": "Check the order ID and try GET /api/purchase-orders.",
    "STOCK_RECORD_NOT_FOUND": "The product is not stocked in that warehouse. "
    "See GET /api/stock/product/{id}.",
    "INSUFFICIENT_STOCK": "Reduce the quantity to at most the available stock.",
    "CAPACITY_EXCEEDED": "Check GET /api/warehouses/{id}/capacity or pick another warehouse.",
    "INVALID_STATE": "Only PENDING purchase orders can be updated, cancelled or received.",
    "CONFLICT": "A record with the same unique value already exists.",
    "UNAUTHORIZED": "Send 'Authorization: Bearer <token>' with a configured API token.",
    "INVALID_ARGUMENT": "Check the request parameters and body.",
    "VALIDATION_ERROR": "Check the request body fields and types.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    if isinstance(exc, StockflowError):
        return STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Build the failure envelope for an exception."""
    status_code = status_for(exc)

    if isinstance(exc, StockflowError):
        error_code = exc.code
        details = exc.details or None
        message = exc.message
    else:
        error_code = "INTERNAL_ERROR"
        details = None
        message = "An unexpected error occurred"

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_code=error_code,
        status=status_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    body = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details,
        hint=_get_hint(error_code, status_code),
        path=request.url.path,
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions no handler claimed.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(StockflowError)
    async def domain_exception_handler(
        request: Request,
        exc: StockflowError,
    ) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                message="Request validation failed",
                error_code="VALIDATION_ERROR",
                errors=errors,
                hint=HINT_MAP["VALIDATION_ERROR"],
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = {
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
        }.get(exc.status_code, "HTTP_ERROR")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=str(exc.detail) if exc.detail else "An error occurred",
                error_code=error_code,
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )
