"""
Reporting endpoints.

Every view accepts an optional ``start_date``/``end_date`` range applied to
distributions, batches and transactions. Inventory valuation is always a
point-in-time snapshot.
"""

from datetime import date

from fastapi import APIRouter, Depends

from sims.api.dependencies import get_analytics_use_case
from sims.application.dto.responses import ApiResponse, ErrorResponse
from sims.application.use_cases import AnalyticsUseCase
from sims.core.entities.report import (
    AnalyticsOverview,
    DistributionPerformance,
    InventoryValuation,
    MonthlySummary,
    ProductionProfitability,
)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
reports_router = APIRouter(prefix="/api", tags=["analytics"])

_RANGE_ERRORS = {400: {"model": ErrorResponse}}


@router.get("/overview", response_model=ApiResponse[AnalyticsOverview], responses=_RANGE_ERRORS)
async def overview(
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: AnalyticsUseCase = Depends(get_analytics_use_case),
) -> ApiResponse[AnalyticsOverview]:
    """All reports plus a summary block."""
    return ApiResponse(data=await use_case.overview(start_date, end_date))


@router.get("/monthly", response_model=ApiResponse[list[MonthlySummary]], responses=_RANGE_ERRORS)
async def monthly(
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: AnalyticsUseCase = Depends(get_analytics_use_case),
) -> ApiResponse[list[MonthlySummary]]:
    """Revenue, expense and net per calendar month, newest first."""
    return ApiResponse(data=await use_case.monthly(start_date, end_date))


@router.get("/inventory-valuation", response_model=ApiResponse[InventoryValuation])
async def inventory_valuation(
    use_case: AnalyticsUseCase = Depends(get_analytics_use_case),
) -> ApiResponse[InventoryValuation]:
    return ApiResponse(data=await use_case.inventory_valuation())


@reports_router.get(
    "/distribution-performance",
    response_model=ApiResponse[DistributionPerformance],
    responses=_RANGE_ERRORS,
)
async def distribution_performance(
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: AnalyticsUseCase = Depends(get_analytics_use_case),
) -> ApiResponse[DistributionPerformance]:
    return ApiResponse(data=await use_case.distribution_performance(start_date, end_date))


@reports_router.get(
    "/production-profitability",
    response_model=ApiResponse[ProductionProfitability],
    responses=_RANGE_ERRORS,
)
async def production_profitability(
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: AnalyticsUseCase = Depends(get_analytics_use_case),
) -> ApiResponse[ProductionProfitability]:
    return ApiResponse(data=await use_case.production_profitability(start_date, end_date))
