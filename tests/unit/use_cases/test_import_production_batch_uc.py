"""Tests for ImportProductionBatchUseCase."""

import pytest

from sims.application.dto.requests import ImportBatchRequest
from sims.application.use_cases.import_production_batch import (
    ImportProductionBatchUseCase,
    parse_batch_id,
)
from sims.core.entities import ItemType
from sims.core.exceptions import (
    InsufficientRemainingError,
    InvalidInputError,
    ProductionBatchNotFoundError,
)


@pytest.fixture
def use_case(
    mock_production_store,
    mock_inventory_store,
    mock_product_store,
    unit_of_work,
    test_settings,
    sample_batch,
):
    mock_production_store.get_batch.return_value = sample_batch

    async def apply_import(batch_id, accepted, rejected):
        return sample_batch.model_copy(
            update={
                "quantity_remaining": sample_batch.quantity_remaining - accepted - rejected,
                "rejected_units": sample_batch.rejected_units + rejected,
            }
        )

    async def create_item(item):
        item.id = 20
        return item

    mock_production_store.apply_import.side_effect = apply_import
    mock_inventory_store.create_item.side_effect = create_item

    return ImportProductionBatchUseCase(
        production_store=mock_production_store,
        inventory_store=mock_inventory_store,
        product_store=mock_product_store,
        unit_of_work=unit_of_work,
        settings=test_settings,
    )


class TestParseBatchId:
    @pytest.mark.parametrize(("value", "expected"), [(7, 7), ("7", 7), (" 12 ", 12)])
    def test_accepted_forms(self, value, expected):
        assert parse_batch_id(value) == expected

    @pytest.mark.parametrize("value", ["abc", "1.5", "", True, None])
    def test_bad_format(self, value):
        with pytest.raises(InvalidInputError):
            parse_batch_id(value)


class TestImportProductionBatchUseCase:
    async def test_creates_finished_lot(self, use_case, mock_inventory_store, sample_batch):
        request = ImportBatchRequest(accepted_units=60, rejected_units=10, selling_price=5.0)

        result = await use_case.execute("1", request)

        lot = mock_inventory_store.create_item.call_args[0][0]
        assert lot.item_type == ItemType.FINISHED_PRODUCT
        assert lot.quantity == 60
        assert lot.unit_cost == 1.5
        assert lot.selling_price == 5.0
        assert lot.batch_id == sample_batch.id
        assert lot.batch_number == sample_batch.batch_number
        assert lot.product_id == 1
        assert lot.location == "Main Warehouse"
        assert "Rejected units: 10" in lot.notes
        assert result.batch.quantity_remaining == 30
        assert result.batch.rejected_units == 10

    async def test_lot_named_after_product(
        self, use_case, mock_inventory_store, mock_product_store, sample_product
    ):
        sample_product.name = "Lavender Soap"
        mock_product_store.get_product.return_value = sample_product

        await use_case.execute(1, ImportBatchRequest(accepted_units=1, selling_price=5))

        assert mock_inventory_store.create_item.call_args[0][0].name == "Lavender Soap"

    async def test_lot_name_falls_back_to_batch_number(
        self, use_case, mock_inventory_store, sample_batch
    ):
        sample_batch.product_name = None
        await use_case.execute(1, ImportBatchRequest(accepted_units=1, selling_price=5))

        name = mock_inventory_store.create_item.call_args[0][0].name
        assert name == f"Batch {sample_batch.batch_number}"

    async def test_exceeding_remaining(self, use_case, mock_production_store, unit_of_work):
        with pytest.raises(InsufficientRemainingError):
            await use_case.execute(
                1, ImportBatchRequest(accepted_units=95, rejected_units=10, selling_price=5)
            )
        mock_production_store.apply_import.assert_not_awaited()
        assert unit_of_work.rolled_back == 1

    async def test_batch_not_found(self, use_case, mock_production_store):
        mock_production_store.get_batch.return_value = None
        with pytest.raises(ProductionBatchNotFoundError):
            await use_case.execute(99, ImportBatchRequest(accepted_units=1, selling_price=5))

    @pytest.mark.parametrize(
        "payload",
        [
            {"accepted_units": 0, "selling_price": 5},
            {"accepted_units": 10, "selling_price": 0},
            {"accepted_units": 10, "rejected_units": -1, "selling_price": 5},
            {"selling_price": 5},
        ],
    )
    async def test_invalid_quantities(self, use_case, mock_production_store, payload):
        with pytest.raises(InvalidInputError):
            await use_case.execute(1, ImportBatchRequest(**payload))
        mock_production_store.get_batch.assert_not_awaited()

    async def test_to_response(self, use_case):
        result = await use_case.execute(
            1, ImportBatchRequest(acceptedUnits=60, rejectedUnits=10, sellingPrice=5)
        )
        response = use_case.to_response(result)
        assert response.inventory_item.id == 20
        assert response.quantity_remaining == 30
        assert response.rejected_in_import == 10
