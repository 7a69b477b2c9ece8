"""Production batch endpoints."""

from fastapi import APIRouter, Depends, status

from sims.api.dependencies import (
    get_batch_store,
    get_create_batch_use_case,
    get_import_batch_use_case,
)
from sims.application.dto.requests import CreateProductionBatchRequest, ImportBatchRequest
from sims.application.dto.responses import (
    ApiResponse,
    ErrorResponse,
    ImportBatchResponse,
    ProductionBatchResponse,
)
from sims.application.use_cases import CreateProductionBatchUseCase, ImportProductionBatchUseCase
from sims.application.use_cases.import_production_batch import parse_batch_id
from sims.core.exceptions import ProductionBatchNotFoundError
from sims.infrastructure.storage.sqlite import SQLiteProductionStore

router = APIRouter(prefix="/api/production-batches", tags=["production"])


@router.get("", response_model=ApiResponse[list[ProductionBatchResponse]])
async def list_batches(
    store: SQLiteProductionStore = Depends(get_batch_store),
) -> ApiResponse[list[ProductionBatchResponse]]:
    """List production batches, newest production date first."""
    batches = await store.list_batches()
    return ApiResponse(data=[ProductionBatchResponse.from_entity(b) for b in batches])


@router.post(
    "",
    response_model=ApiResponse[ProductionBatchResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_batch(
    request: CreateProductionBatchRequest,
    use_case: CreateProductionBatchUseCase = Depends(get_create_batch_use_case),
) -> ApiResponse[ProductionBatchResponse]:
    """Record a production run, consuming raw materials and booking its cost."""
    result = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(result), message="Production batch created")


@router.get(
    "/{batch_id}",
    response_model=ApiResponse[ProductionBatchResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_batch(
    batch_id: str,
    store: SQLiteProductionStore = Depends(get_batch_store),
) -> ApiResponse[ProductionBatchResponse]:
    parsed_id = parse_batch_id(batch_id)
    batch = await store.get_batch(parsed_id)
    if batch is None:
        raise ProductionBatchNotFoundError(parsed_id)
    return ApiResponse(data=ProductionBatchResponse.from_entity(batch))


@router.post(
    "/{batch_id}/import",
    response_model=ApiResponse[ImportBatchResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def import_batch(
    batch_id: str,
    request: ImportBatchRequest,
    use_case: ImportProductionBatchUseCase = Depends(get_import_batch_use_case),
) -> ApiResponse[ImportBatchResponse]:
    """Release QC-accepted units of a batch as a new finished-goods lot."""
    result = await use_case.execute(batch_id, request)
    return ApiResponse(data=use_case.to_response(result), message="Batch imported")
