"""
Error handling middleware.

Standardizes all API error responses into the envelope:
- success: always false
- error: machine-readable identifier
- message: human-readable description
- details: structured context from the raised error
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from sims.application.dto.responses import ErrorResponse
from sims.config import get_logger
from sims.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    SequenceAllocationError,
    SIMSError,
    StockError,
    StorageError,
    StorageUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StockError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    SequenceAllocationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products to list products.",
    "INVENTORY_ITEM_NOT_FOUND": "Check the item ID or barcode and try GET /api/inventory.",
    "PRODUCTION_BATCH_NOT_FOUND": "Check the batch ID and try GET /api/production-batches.",
    "DISTRIBUTION_NOT_FOUND": "Check the distribution ID and try GET /api/distributions.",
    "PAYMENT_NOT_FOUND": "Check the payment ID and try GET /api/payments.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or restock the item first.",
    "INSUFFICIENT_REMAINING": "Import no more than the batch's remaining units.",
    "INVALID_INPUT": "Check the field named in details.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "STORAGE_UNAVAILABLE": "The database is unreachable or locked. Retry later.",
    "SEQUENCE_ALLOCATION_FAILED": "No identifier could be allocated. Retry later.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    405: "The HTTP method is not allowed for this path.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    """HTTP status code for a raised exception."""
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = status_for(exc)

    if isinstance(exc, SIMSError):
        error_code = exc.code
        message = exc.message
        details = exc.details or None
    else:
        error_code = "INTERNAL_ERROR"
        message = "An unexpected error occurred"
        details = None

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_code=error_code,
        error_type=exc.__class__.__name__,
        error=str(exc),
        status=status_code,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error=error_code,
        message=message,
        details=details,
        hint=_get_hint(error_code, status_code),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escape the routers to JSON error envelopes.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(SIMSError)
    async def domain_exception_handler(request: Request, exc: SIMSError) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details={"errors": errors},
                hint=HINT_MAP["VALIDATION_ERROR"],
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTPException status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 400:
        return "BAD_REQUEST"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    return "HTTP_ERROR"
