"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from sims.application.dto.responses import ApiResponse, HealthResponse, ProviderHealthResponse
from sims.config import get_settings
from sims.core.exceptions import StorageError

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=ApiResponse[HealthResponse])
async def health_check() -> ApiResponse[HealthResponse]:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return ApiResponse(
        data=HealthResponse(
            status="healthy",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
        )
    )


@router.get("/db", response_model=ApiResponse[HealthResponse])
async def db_health() -> ApiResponse[HealthResponse]:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from sims.infrastructure.storage.sqlite import check_connection

    try:
        start = time.time()
        await check_connection()
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )
    except StorageError as e:
        db_status = ProviderHealthResponse(name="sqlite", available=False, error=e.message)

    return ApiResponse(
        data=HealthResponse(
            status="healthy" if db_status.available else "unhealthy",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
            database=db_status,
        )
    )
