"""Product catalogue endpoints."""

from fastapi import APIRouter, Depends, status

from sims.api.dependencies import get_create_product_use_case, get_prod_store
from sims.application.dto.requests import CreateProductRequest, UpdateProductRequest
from sims.application.dto.responses import ApiResponse, ErrorResponse, ProductResponse
from sims.application.use_cases import CreateProductUseCase
from sims.core.exceptions import ProductNotFoundError
from sims.infrastructure.storage.sqlite import SQLiteProductStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ApiResponse[list[ProductResponse]])
async def list_products(
    active_only: bool = False,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ApiResponse[list[ProductResponse]]:
    """List catalogue products."""
    products = await store.list_products(active_only=active_only)
    return ApiResponse(data=[ProductResponse.from_entity(p) for p in products])


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ApiResponse[ProductResponse]:
    product = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(product), message="Product created")


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ApiResponse[ProductResponse]:
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ApiResponse(data=ProductResponse.from_entity(product))


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ApiResponse[ProductResponse]:
    """Partially update a product; only supplied fields change."""
    product = await store.update_product(product_id, request.to_fields())
    return ApiResponse(data=ProductResponse.from_entity(product), message="Product updated")


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ApiResponse[None]:
    """Delete a product. Batches and lots referencing it are left untouched."""
    if not await store.delete_product(product_id):
        raise ProductNotFoundError(product_id)
    return ApiResponse(message="Product deleted")
