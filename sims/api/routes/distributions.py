"""Distribution (sales) endpoints."""

from fastapi import APIRouter, Depends, status

from sims.api.dependencies import (
    get_create_distribution_use_case,
    get_dist_store,
    get_inv_item_store,
    get_prod_store,
    get_reverse_distribution_use_case,
)
from sims.application.dto.requests import CreateDistributionRequest, ReverseDistributionRequest
from sims.application.dto.responses import (
    ApiResponse,
    CreateDistributionResponse,
    DistributionResponse,
    ErrorResponse,
    ReverseDistributionResponse,
)
from sims.application.services import get_financial_aggregator
from sims.application.use_cases import CreateDistributionUseCase, ReverseDistributionUseCase
from sims.core.exceptions import DistributionNotFoundError
from sims.infrastructure.storage.sqlite import (
    SQLiteDistributionStore,
    SQLiteInventoryStore,
    SQLiteProductStore,
)

router = APIRouter(prefix="/api/distributions", tags=["distributions"])


@router.get("", response_model=ApiResponse[list[DistributionResponse]])
async def list_distributions(
    dist_store: SQLiteDistributionStore = Depends(get_dist_store),
    inv_store: SQLiteInventoryStore = Depends(get_inv_item_store),
    prod_store: SQLiteProductStore = Depends(get_prod_store),
) -> ApiResponse[list[DistributionResponse]]:
    """List distributions with cost of goods sold and profit derived per row."""
    distributions = await dist_store.list_distributions()
    items_by_id = {i.id: i for i in await inv_store.list_items()}
    products_by_id = {p.id: p for p in await prod_store.list_products()}

    aggregator = get_financial_aggregator()
    return ApiResponse(
        data=[
            DistributionResponse.from_entity(
                d, aggregator.distribution_metrics(d, items_by_id, products_by_id)
            )
            for d in distributions
        ]
    )


@router.post(
    "",
    response_model=ApiResponse[CreateDistributionResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_distribution(
    request: CreateDistributionRequest,
    use_case: CreateDistributionUseCase = Depends(get_create_distribution_use_case),
) -> ApiResponse[CreateDistributionResponse]:
    """Sell finished goods: decrements the lot and books the revenue."""
    result = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(result), message="Distribution recorded")


@router.delete(
    "/{distribution_id}",
    response_model=ApiResponse[None],
    responses={404: {"model": ErrorResponse}},
)
async def delete_distribution(
    distribution_id: int,
    store: SQLiteDistributionStore = Depends(get_dist_store),
) -> ApiResponse[None]:
    """
    Purge a distribution record.

    Stock and revenue are left as they are; use the reverse endpoint to undo
    a sale.
    """
    if not await store.delete_distribution(distribution_id):
        raise DistributionNotFoundError(distribution_id)
    return ApiResponse(message="Distribution deleted")


@router.post(
    "/{distribution_id}/reverse",
    response_model=ApiResponse[ReverseDistributionResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def reverse_distribution(
    distribution_id: int,
    request: ReverseDistributionRequest | None = None,
    use_case: ReverseDistributionUseCase = Depends(get_reverse_distribution_use_case),
) -> ApiResponse[ReverseDistributionResponse]:
    """Restock the lot, book an offsetting expense and mark the sale reversed."""
    result = await use_case.execute(distribution_id, request)
    return ApiResponse(data=use_case.to_response(result), message="Distribution reversed")
