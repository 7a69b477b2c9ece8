"""API tests for inventory endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from sims.api.dependencies import (
    get_adjust_inventory_use_case,
    get_create_inventory_item_use_case,
    get_inv_item_store,
)
from sims.application.use_cases.adjust_inventory import AdjustInventoryUseCase
from sims.application.use_cases.create_inventory_item import CreateInventoryItemUseCase
from sims.core.entities import ItemType
from sims.core.exceptions import InsufficientStockError, InvalidInputError


@pytest.fixture
def inventory_store(overrides, raw_material, finished_lot):
    store = AsyncMock()
    store.list_items.return_value = [raw_material, finished_lot]
    store.list_low_stock.return_value = []
    store.get_item_by_key.return_value = raw_material
    store.delete_item.return_value = True
    overrides[get_inv_item_store] = lambda: store
    return store


@pytest.fixture
def create_use_case(overrides, raw_material):
    uc = AsyncMock(spec=CreateInventoryItemUseCase)
    uc.execute.return_value = raw_material
    uc.to_response.return_value = CreateInventoryItemUseCase().to_response(raw_material)
    overrides[get_create_inventory_item_use_case] = lambda: uc
    return uc


@pytest.fixture
def adjust_use_case(overrides, raw_material):
    uc = AsyncMock(spec=AdjustInventoryUseCase)
    adjusted = raw_material.model_copy(update={"quantity": 95.0})
    uc.execute.return_value = adjusted
    uc.to_response.return_value = AdjustInventoryUseCase().to_response(adjusted)
    overrides[get_adjust_inventory_use_case] = lambda: uc
    return uc


class TestInventoryAPI:
    async def test_list_with_derived_fields(self, client: AsyncClient, inventory_store):
        response = await client.get("/api/inventory")

        assert response.status_code == 200
        rows = response.json()["data"]
        assert rows[0]["stock_status"] == "In Stock"
        assert rows[1]["item_type"] == "finished_product"

    async def test_list_filtered_by_type(self, client: AsyncClient, inventory_store):
        await client.get("/api/inventory", params={"item_type": "raw_material"})

        inventory_store.list_items.assert_awaited_once_with(item_type=ItemType.RAW_MATERIAL)

    async def test_low_stock_route_not_shadowed(self, client: AsyncClient, inventory_store):
        response = await client.get("/api/inventory/low-stock")

        assert response.status_code == 200
        inventory_store.list_low_stock.assert_awaited_once()
        inventory_store.get_item_by_key.assert_not_awaited()

    async def test_get_by_barcode(self, client: AsyncClient, inventory_store):
        response = await client.get("/api/inventory/6291041500213")

        assert response.status_code == 200
        inventory_store.get_item_by_key.assert_awaited_once_with("6291041500213")

    async def test_get_missing(self, client: AsyncClient, inventory_store):
        inventory_store.get_item_by_key.return_value = None

        response = await client.get("/api/inventory/404")

        assert response.status_code == 404
        assert response.json()["error"] == "INVENTORY_ITEM_NOT_FOUND"

    async def test_create(self, client: AsyncClient, create_use_case):
        response = await client.post(
            "/api/inventory",
            json={"itemType": "raw_material", "name": "Olive oil", "quantity": 100},
        )

        assert response.status_code == 201
        request = create_use_case.execute.await_args.args[0]
        assert request.item_type == ItemType.RAW_MATERIAL

    async def test_raw_materials_route_forces_type(self, client: AsyncClient, create_use_case):
        response = await client.post(
            "/api/raw-materials", json={"name": "Olive oil", "quantity": 100}
        )

        assert response.status_code == 201
        request = create_use_case.execute.await_args.args[0]
        assert request.item_type == ItemType.RAW_MATERIAL

    async def test_finished_products_list(self, client: AsyncClient, inventory_store):
        response = await client.get("/api/finished-products")

        assert response.status_code == 200
        inventory_store.list_items.assert_awaited_once_with(item_type=ItemType.FINISHED_PRODUCT)

    async def test_update_rejects_id(self, client: AsyncClient, inventory_store):
        inventory_store.update_item.side_effect = InvalidInputError(
            field="id", message="identifier fields cannot be updated"
        )

        response = await client.put("/api/inventory/10", json={"id": 99})

        assert response.status_code == 400
        inventory_store.update_item.assert_awaited_once_with("10", {"id": 99})

    async def test_delete(self, client: AsyncClient, inventory_store):
        assert (await client.delete("/api/inventory/10")).status_code == 200

        inventory_store.delete_item.return_value = False
        assert (await client.delete("/api/inventory/10")).status_code == 404

    async def test_adjust(self, client: AsyncClient, adjust_use_case):
        response = await client.post("/api/inventory/10/adjust", json={"delta": -5})

        assert response.status_code == 200
        assert response.json()["data"]["quantity"] == 95.0

    async def test_adjust_overdraw(self, client: AsyncClient, adjust_use_case):
        adjust_use_case.execute.side_effect = InsufficientStockError(
            item_id=10, requested=500, available=100
        )

        response = await client.post("/api/inventory/10/adjust", json={"delta": -500})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "INSUFFICIENT_STOCK"
        assert body["details"]["available"] == 100
