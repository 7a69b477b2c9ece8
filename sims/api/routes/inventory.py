"""Inventory ledger endpoints.

Items are addressed by ``{key}``: the numeric id, or the barcode as an
alternate key.
"""

from fastapi import APIRouter, Depends, status

from sims.api.dependencies import (
    get_adjust_inventory_use_case,
    get_create_inventory_item_use_case,
    get_inv_item_store,
)
from sims.application.dto.requests import (
    AdjustInventoryRequest,
    CreateInventoryItemRequest,
    UpdateInventoryItemRequest,
)
from sims.application.dto.responses import ApiResponse, ErrorResponse, InventoryItemResponse
from sims.application.use_cases import AdjustInventoryUseCase, CreateInventoryItemUseCase
from sims.core.entities.inventory import ItemType
from sims.core.exceptions import InventoryItemNotFoundError
from sims.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])
raw_materials_router = APIRouter(prefix="/api/raw-materials", tags=["inventory"])
finished_products_router = APIRouter(prefix="/api/finished-products", tags=["inventory"])


def _items(items) -> ApiResponse[list[InventoryItemResponse]]:
    return ApiResponse(data=[InventoryItemResponse.from_entity(i) for i in items])


@router.get("", response_model=ApiResponse[list[InventoryItemResponse]])
async def list_inventory(
    item_type: ItemType | None = None,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[list[InventoryItemResponse]]:
    """List inventory, optionally filtered by item type."""
    return _items(await store.list_items(item_type=item_type))


@router.post(
    "",
    response_model=ApiResponse[InventoryItemResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_inventory_item(
    request: CreateInventoryItemRequest,
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> ApiResponse[InventoryItemResponse]:
    item = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(item), message="Inventory item created")


@router.get("/low-stock", response_model=ApiResponse[list[InventoryItemResponse]])
async def list_low_stock(
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[list[InventoryItemResponse]]:
    """Items at or below their minimum stock level."""
    return _items(await store.list_low_stock())


@router.get(
    "/{key}",
    response_model=ApiResponse[InventoryItemResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_inventory_item(
    key: str,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[InventoryItemResponse]:
    item = await store.get_item_by_key(key)
    if item is None:
        raise InventoryItemNotFoundError(key)
    return ApiResponse(data=InventoryItemResponse.from_entity(item))


@router.put(
    "/{key}",
    response_model=ApiResponse[InventoryItemResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_inventory_item(
    key: str,
    request: UpdateInventoryItemRequest,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[InventoryItemResponse]:
    """Partially update an item. Attempts to change its id are rejected."""
    item = await store.update_item(key, request.to_fields())
    return ApiResponse(data=InventoryItemResponse.from_entity(item), message="Inventory updated")


@router.delete(
    "/{key}",
    response_model=ApiResponse[None],
    responses={404: {"model": ErrorResponse}},
)
async def delete_inventory_item(
    key: str,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[None]:
    if not await store.delete_item(key):
        raise InventoryItemNotFoundError(key)
    return ApiResponse(message="Inventory item deleted")


@router.post(
    "/{key}/adjust",
    response_model=ApiResponse[InventoryItemResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_inventory(
    key: str,
    request: AdjustInventoryRequest,
    use_case: AdjustInventoryUseCase = Depends(get_adjust_inventory_use_case),
) -> ApiResponse[InventoryItemResponse]:
    """Apply a signed quantity change (stock count correction, breakage)."""
    item = await use_case.execute(key, request)
    return ApiResponse(data=use_case.to_response(item), message="Stock adjusted")


@raw_materials_router.get("", response_model=ApiResponse[list[InventoryItemResponse]])
async def list_raw_materials(
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[list[InventoryItemResponse]]:
    return _items(await store.list_items(item_type=ItemType.RAW_MATERIAL))


@raw_materials_router.post(
    "",
    response_model=ApiResponse[InventoryItemResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_raw_material(
    request: CreateInventoryItemRequest,
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> ApiResponse[InventoryItemResponse]:
    """Register a raw material; the item type is implied by the path."""
    request = request.model_copy(update={"item_type": ItemType.RAW_MATERIAL})
    item = await use_case.execute(request)
    return ApiResponse(data=use_case.to_response(item), message="Raw material created")


@finished_products_router.get("", response_model=ApiResponse[list[InventoryItemResponse]])
async def list_finished_products(
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ApiResponse[list[InventoryItemResponse]]:
    return _items(await store.list_items(item_type=ItemType.FINISHED_PRODUCT))
