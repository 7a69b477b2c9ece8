"""Tests for CreateDistributionUseCase and ReverseDistributionUseCase."""

import pytest

from sims.application.dto.requests import CreateDistributionRequest, ReverseDistributionRequest
from sims.application.use_cases.create_distribution import (
    SALES_CATEGORY,
    CreateDistributionUseCase,
)
from sims.application.use_cases.reverse_distribution import (
    REVERSAL_CATEGORY,
    ReverseDistributionUseCase,
)
from sims.core.entities import DistributionStatus, TransactionType
from sims.core.exceptions import (
    DistributionNotFoundError,
    InsufficientStockError,
    InvalidInputError,
    InventoryItemNotFoundError,
)


@pytest.fixture
def adjust_lot(finished_lot):
    async def adjust(item_id, delta, allow_negative=False):
        return finished_lot.model_copy(update={"quantity": finished_lot.quantity + delta})

    return adjust


@pytest.fixture
def create_use_case(
    mock_inventory_store,
    mock_distribution_store,
    mock_financial_store,
    mock_product_store,
    unit_of_work,
    finished_lot,
    adjust_lot,
):
    mock_inventory_store.get_item.return_value = finished_lot
    mock_inventory_store.adjust_quantity.side_effect = adjust_lot

    async def create_distribution(distribution):
        distribution.id = 1
        return distribution

    mock_distribution_store.create_distribution.side_effect = create_distribution
    return CreateDistributionUseCase(
        inventory_store=mock_inventory_store,
        distribution_store=mock_distribution_store,
        financial_store=mock_financial_store,
        product_store=mock_product_store,
        unit_of_work=unit_of_work,
    )


def _request(**overrides) -> CreateDistributionRequest:
    data = {
        "inventory_item_id": 20,
        "recipient_name": "Corner Shop",
        "quantity": 60,
        "unit_price": 5.0,
    }
    data.update(overrides)
    return CreateDistributionRequest(**data)


class TestCreateDistributionUseCase:
    async def test_records_sale_and_revenue(
        self, create_use_case, mock_inventory_store, mock_financial_store, unit_of_work
    ):
        result = await create_use_case.execute(_request())

        assert result.distribution.total_amount == 300.0
        assert result.distribution.status == DistributionStatus.COMPLETED
        mock_inventory_store.adjust_quantity.assert_awaited_once_with(20, -60)
        assert result.inventory_item.quantity == 0

        mock_financial_store.add_transaction.assert_awaited_once()
        txn = result.transaction
        assert txn.transaction_type == TransactionType.REVENUE
        assert txn.amount == 300.0
        assert txn.category == SALES_CATEGORY
        assert txn.description == "Sale to Corner Shop"
        assert txn.distribution_id == 1
        assert txn.transaction_date == result.distribution.distribution_date
        assert unit_of_work.committed == 1

    async def test_response_profit_figures(
        self, create_use_case, mock_product_store, sample_product
    ):
        mock_product_store.get_product.return_value = sample_product
        result = await create_use_case.execute(_request())

        response = create_use_case.to_response(result)

        assert response.distribution.cost_of_goods_sold == 90.0
        assert response.distribution.gross_profit == 210.0
        assert response.distribution.profit_margin_percent == 70.0
        assert response.distribution.product_name == "Rose Soap"
        assert response.remaining_stock == 0

    async def test_insufficient_stock(
        self, create_use_case, mock_inventory_store, mock_financial_store, unit_of_work
    ):
        with pytest.raises(InsufficientStockError):
            await create_use_case.execute(_request(quantity=61))

        mock_inventory_store.adjust_quantity.assert_not_awaited()
        mock_financial_store.add_transaction.assert_not_awaited()
        assert unit_of_work.rolled_back == 1

    async def test_lot_not_found(self, create_use_case, mock_inventory_store):
        mock_inventory_store.get_item.return_value = None
        with pytest.raises(InventoryItemNotFoundError):
            await create_use_case.execute(_request())

    async def test_raw_material_cannot_be_distributed(
        self, create_use_case, mock_inventory_store, raw_material
    ):
        mock_inventory_store.get_item.return_value = raw_material
        with pytest.raises(InvalidInputError):
            await create_use_case.execute(_request(inventory_item_id=10))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": 0},
            {"unit_price": 0},
            {"unit_price": -1},
            {"recipient_name": "  "},
            {"inventory_item_id": None},
        ],
    )
    async def test_invalid_input(self, create_use_case, mock_inventory_store, overrides):
        with pytest.raises(InvalidInputError):
            await create_use_case.execute(_request(**overrides))
        mock_inventory_store.get_item.assert_not_awaited()


@pytest.fixture
def reverse_use_case(
    mock_distribution_store,
    mock_inventory_store,
    mock_financial_store,
    unit_of_work,
    sample_distribution,
    adjust_lot,
):
    mock_distribution_store.get_distribution.return_value = sample_distribution
    mock_inventory_store.adjust_quantity.side_effect = adjust_lot

    async def set_status(distribution_id, status):
        return sample_distribution.model_copy(update={"status": status})

    mock_distribution_store.set_status.side_effect = set_status
    return ReverseDistributionUseCase(
        distribution_store=mock_distribution_store,
        inventory_store=mock_inventory_store,
        financial_store=mock_financial_store,
        unit_of_work=unit_of_work,
    )


class TestReverseDistributionUseCase:
    async def test_restocks_and_books_expense(
        self, reverse_use_case, mock_inventory_store, mock_distribution_store
    ):
        result = await reverse_use_case.execute(
            1, ReverseDistributionRequest(reason="returned unopened")
        )

        mock_inventory_store.adjust_quantity.assert_awaited_once_with(20, 60.0)
        assert result.inventory_item.quantity == 120.0
        assert result.transaction.transaction_type == TransactionType.EXPENSE
        assert result.transaction.category == REVERSAL_CATEGORY
        assert result.transaction.amount == 300.0
        assert "returned unopened" in result.transaction.description
        mock_distribution_store.set_status.assert_awaited_once_with(1, DistributionStatus.REVERSED)
        assert result.distribution.status == DistributionStatus.REVERSED

    async def test_reversing_twice(self, reverse_use_case, sample_distribution, unit_of_work):
        sample_distribution.status = DistributionStatus.REVERSED
        with pytest.raises(InvalidInputError):
            await reverse_use_case.execute(1)
        assert unit_of_work.rolled_back == 1

    async def test_not_found(self, reverse_use_case, mock_distribution_store):
        mock_distribution_store.get_distribution.return_value = None
        with pytest.raises(DistributionNotFoundError):
            await reverse_use_case.execute(5)

    async def test_deleted_lot_skips_restock(
        self, reverse_use_case, mock_inventory_store, mock_distribution_store, unit_of_work
    ):
        mock_inventory_store.adjust_quantity.side_effect = InventoryItemNotFoundError(20)

        result = await reverse_use_case.execute(1)

        assert result.inventory_item is None
        assert result.restocked_quantity == 0.0
        assert result.transaction.amount == 300.0
        assert result.distribution.status == DistributionStatus.REVERSED
        assert unit_of_work.committed == 1

        response = reverse_use_case.to_response(result)
        assert response.restocked_quantity == 0.0
        assert response.distribution.product_name == "Unknown Product"

    async def test_to_response(self, reverse_use_case):
        result = await reverse_use_case.execute(1)
        response = reverse_use_case.to_response(result)
        assert response.restocked_quantity == 60.0
        assert response.distribution.status == "reversed"
