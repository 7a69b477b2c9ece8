"""API tests for product catalogue endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from sims.api.dependencies import get_create_product_use_case, get_prod_store
from sims.application.use_cases.create_product import CreateProductUseCase
from sims.core.entities import Product
from sims.core.exceptions import InvalidInputError, ProductNotFoundError


@pytest.fixture
def product_store(overrides, sample_product):
    store = AsyncMock()
    store.list_products.return_value = [sample_product]
    store.get_product.return_value = sample_product
    store.delete_product.return_value = True
    overrides[get_prod_store] = lambda: store
    return store


@pytest.fixture
def create_use_case(overrides, sample_product):
    uc = AsyncMock(spec=CreateProductUseCase)
    uc.execute.return_value = sample_product
    uc.to_response.return_value = CreateProductUseCase().to_response(sample_product)
    overrides[get_create_product_use_case] = lambda: uc
    return uc


class TestProductsAPI:
    async def test_list(self, client: AsyncClient, product_store):
        response = await client.get("/api/products", params={"active_only": "true"})

        assert response.status_code == 200
        assert response.json()["data"][0]["name"] == "Rose Soap"
        product_store.list_products.assert_awaited_once_with(active_only=True)

    async def test_create(self, client: AsyncClient, create_use_case):
        response = await client.post("/api/products", json={"name": "Rose Soap"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created"
        assert body["data"]["id"] == 1

    async def test_create_missing_name(self, client: AsyncClient, create_use_case):
        create_use_case.execute.side_effect = InvalidInputError(field="name", message="is required")

        response = await client.post("/api/products", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    async def test_get_not_found(self, client: AsyncClient, product_store):
        product_store.get_product.return_value = None

        response = await client.get("/api/products/9")

        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCT_NOT_FOUND"

    async def test_update_passes_only_supplied_fields(self, client: AsyncClient, product_store):
        product_store.update_product.return_value = Product(id=1, name="Rose Soap", is_active=False)

        response = await client.put("/api/products/1", json={"isActive": False})

        assert response.status_code == 200
        product_store.update_product.assert_awaited_once_with(1, {"is_active": False})
        assert response.json()["data"]["is_active"] is False

    async def test_update_missing(self, client: AsyncClient, product_store):
        product_store.update_product.side_effect = ProductNotFoundError(7)

        response = await client.put("/api/products/7", json={"name": "x"})

        assert response.status_code == 404

    async def test_delete(self, client: AsyncClient, product_store):
        assert (await client.delete("/api/products/1")).status_code == 200

        product_store.delete_product.return_value = False
        assert (await client.delete("/api/products/1")).status_code == 404
