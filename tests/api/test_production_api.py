"""API tests for production batch endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from sims.api.dependencies import (
    get_batch_store,
    get_create_batch_use_case,
    get_import_batch_use_case,
)
from sims.application.use_cases.create_production_batch import (
    CreateProductionBatchResult,
    CreateProductionBatchUseCase,
)
from sims.application.use_cases.import_production_batch import (
    ImportBatchResult,
    ImportProductionBatchUseCase,
)
from sims.core.exceptions import InsufficientRemainingError, InsufficientStockError


@pytest.fixture
def batch_store(overrides, sample_batch):
    store = AsyncMock()
    store.list_batches.return_value = [sample_batch]
    store.get_batch.return_value = sample_batch
    overrides[get_batch_store] = lambda: store
    return store


@pytest.fixture
def create_use_case(overrides, sample_batch):
    uc = AsyncMock(spec=CreateProductionBatchUseCase)
    result = CreateProductionBatchResult(batch=sample_batch)
    uc.execute.return_value = result
    uc.to_response.return_value = CreateProductionBatchUseCase().to_response(result)
    overrides[get_create_batch_use_case] = lambda: uc
    return uc


@pytest.fixture
def import_use_case(overrides, sample_batch, finished_lot):
    uc = AsyncMock(spec=ImportProductionBatchUseCase)
    batch = sample_batch.model_copy(update={"quantity_remaining": 30.0, "rejected_units": 10.0})
    result = ImportBatchResult(
        inventory_item=finished_lot, batch=batch, accepted_units=60, rejected_units=10
    )
    uc.execute.return_value = result
    uc.to_response.return_value = ImportProductionBatchUseCase().to_response(result)
    overrides[get_import_batch_use_case] = lambda: uc
    return uc


class TestProductionAPI:
    async def test_list(self, client: AsyncClient, batch_store):
        response = await client.get("/api/production-batches")

        assert response.status_code == 200
        row = response.json()["data"][0]
        assert row["batch_number"] == "BATCH-20260115-ABCDEF"
        assert row["cost_per_unit"] == 1.5

    async def test_create(self, client: AsyncClient, create_use_case):
        response = await client.post(
            "/api/production-batches",
            json={
                "productId": 1,
                "quantityProduced": 100,
                "rawMaterialsUsed": [{"rawMaterialId": 10, "quantity": 50}],
                "fixedCosts": {"labor": 50},
            },
        )

        assert response.status_code == 201
        request = create_use_case.execute.await_args.args[0]
        assert request.raw_materials_used[0].raw_material_id == 10
        assert request.fixed_costs.labor == 50

    async def test_create_insufficient_stock(self, client: AsyncClient, create_use_case):
        create_use_case.execute.side_effect = InsufficientStockError(
            item_id=10, requested=500, available=100
        )

        response = await client.post(
            "/api/production-batches", json={"product_id": 1, "quantity_produced": 10}
        )

        assert response.status_code == 400
        assert response.json()["hint"]

    async def test_get_by_numeric_string(self, client: AsyncClient, batch_store):
        response = await client.get("/api/production-batches/1")

        assert response.status_code == 200
        batch_store.get_batch.assert_awaited_once_with(1)

    async def test_get_invalid_id(self, client: AsyncClient, batch_store):
        response = await client.get("/api/production-batches/first")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "batch_id"

    async def test_get_missing(self, client: AsyncClient, batch_store):
        batch_store.get_batch.return_value = None

        response = await client.get("/api/production-batches/5")

        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCTION_BATCH_NOT_FOUND"

    async def test_import(self, client: AsyncClient, import_use_case):
        response = await client.post(
            "/api/production-batches/1/import",
            json={"acceptedUnits": 60, "rejectedUnits": 10, "sellingPrice": 5},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["quantity_remaining"] == 30.0
        assert data["inventory_item"]["id"] == 20
        import_use_case.execute.assert_awaited_once()
        assert import_use_case.execute.await_args.args[0] == "1"

    async def test_import_beyond_remaining(self, client: AsyncClient, import_use_case):
        import_use_case.execute.side_effect = InsufficientRemainingError(
            batch_id=1, requested=15, remaining=10
        )

        response = await client.post(
            "/api/production-batches/1/import",
            json={"accepted_units": 15, "selling_price": 5},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_REMAINING"
