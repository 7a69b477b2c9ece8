"""Integration tests: production → import → distribution → payment on real SQLite."""

from unittest.mock import patch

import pytest

from sims.application.dto.requests import (
    CreateDistributionRequest,
    CreateInventoryItemRequest,
    CreateProductionBatchRequest,
    CreateProductRequest,
    ImportBatchRequest,
    RecordPaymentRequest,
    ReverseDistributionRequest,
)
from sims.application.use_cases import (
    AnalyticsUseCase,
    CreateDistributionUseCase,
    CreateInventoryItemUseCase,
    CreateProductionBatchUseCase,
    CreateProductUseCase,
    ImportProductionBatchUseCase,
    RecordPaymentUseCase,
    RecoverySummaryUseCase,
    ReverseDistributionUseCase,
)
from sims.core.entities import TransactionType
from sims.core.exceptions import (
    InsufficientRemainingError,
    InsufficientStockError,
    InvalidInputError,
)
from sims.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    get_financial_store,
    get_inventory_store,
    get_production_store,
)


async def _produce_batch(mock_settings):
    """Olive oil 100 @ 2.0; batch of 100 using 50 oil plus 50 labor."""
    oil = await CreateInventoryItemUseCase(settings=mock_settings).execute(
        CreateInventoryItemRequest(
            item_type="raw_material", name="Olive oil", quantity=100, unit_cost=2.0
        )
    )
    product = await CreateProductUseCase().execute(CreateProductRequest(name="Rose Soap"))
    result = await CreateProductionBatchUseCase(settings=mock_settings).execute(
        CreateProductionBatchRequest(
            product_id=product.id,
            quantity_produced=100,
            raw_materials_used=[{"raw_material_id": oil.id, "quantity": 50}],
            fixed_costs={"labor": 50},
        )
    )
    return oil, product, result.batch


class TestProductionFlow:
    async def test_batch_costing_and_consumption(self, sqlite_db, mock_settings):
        oil, _, batch = await _produce_batch(mock_settings)

        assert batch.total_cost == 150.0
        assert batch.cost_per_unit == 1.5
        assert batch.product_name == "Rose Soap"

        inventory = await get_inventory_store()
        assert (await inventory.get_item(oil.id)).quantity == 50.0

        stored = await (await get_production_store()).get_batch(batch.id)
        assert len(stored.costs) == 2

        expenses = await (await get_financial_store()).list_transactions()
        assert [(t.transaction_type, t.amount, t.category) for t in expenses] == [
            (TransactionType.EXPENSE, 150.0, "Production")
        ]

    async def test_qc_imports_until_exhausted(self, sqlite_db, mock_settings):
        _, _, batch = await _produce_batch(mock_settings)
        use_case = ImportProductionBatchUseCase(settings=mock_settings)

        first = await use_case.execute(
            batch.id, ImportBatchRequest(accepted_units=60, rejected_units=10, selling_price=5)
        )
        assert first.batch.quantity_remaining == 30.0
        assert first.inventory_item.quantity == 60.0
        assert first.inventory_item.unit_cost == 1.5
        assert first.inventory_item.name == "Rose Soap"
        assert first.inventory_item.location == "Main Warehouse"

        second = await use_case.execute(
            str(batch.id), ImportBatchRequest(accepted_units=20, selling_price=5)
        )
        assert second.batch.quantity_remaining == 10.0
        assert second.batch.rejected_units == 10.0

        with pytest.raises(InsufficientRemainingError):
            await use_case.execute(
                batch.id, ImportBatchRequest(accepted_units=15, selling_price=5)
            )

        stored = await (await get_production_store()).get_batch(batch.id)
        assert stored.quantity_remaining == 10.0
        lots = await (await get_inventory_store()).list_items(item_type="finished_product")
        assert sorted(lot.quantity for lot in lots) == [20.0, 60.0]

    async def test_insufficient_raw_material_writes_nothing(self, sqlite_db, mock_settings):
        oil, product, _ = await _produce_batch(mock_settings)

        with pytest.raises(InsufficientStockError):
            await CreateProductionBatchUseCase(settings=mock_settings).execute(
                CreateProductionBatchRequest(
                    product_id=product.id,
                    quantity_produced=10,
                    raw_materials_used=[{"raw_material_id": oil.id, "quantity": 51}],
                )
            )

        assert (await (await get_inventory_store()).get_item(oil.id)).quantity == 50.0
        assert len(await (await get_production_store()).list_batches()) == 1

    async def test_negative_material_line_leaves_stock_untouched(self, sqlite_db, mock_settings):
        oil, product, _ = await _produce_batch(mock_settings)

        with pytest.raises(InvalidInputError):
            await CreateProductionBatchUseCase(settings=mock_settings).execute(
                CreateProductionBatchRequest(
                    product_id=product.id,
                    quantity_produced=10,
                    raw_materials_used=[{"raw_material_id": oil.id, "quantity": -50}],
                    fixed_costs={"labor": -20},
                )
            )

        assert (await (await get_inventory_store()).get_item(oil.id)).quantity == 50.0
        assert len(await (await get_production_store()).list_batches()) == 1
        expenses = await (await get_financial_store()).list_transactions()
        assert [t.amount for t in expenses] == [150.0]

    async def test_failed_import_rolls_back_batch_counters(self, sqlite_db, mock_settings):
        _, _, batch = await _produce_batch(mock_settings)

        with patch.object(SQLiteInventoryStore, "create_item", side_effect=RuntimeError("disk")):
            with pytest.raises(RuntimeError):
                await ImportProductionBatchUseCase(settings=mock_settings).execute(
                    batch.id, ImportBatchRequest(accepted_units=60, selling_price=5)
                )

        stored = await (await get_production_store()).get_batch(batch.id)
        assert stored.quantity_remaining == 100.0


@pytest.fixture
async def finished_lot_id(sqlite_db, mock_settings) -> int:
    _, _, batch = await _produce_batch(mock_settings)
    result = await ImportProductionBatchUseCase(settings=mock_settings).execute(
        batch.id, ImportBatchRequest(accepted_units=60, rejected_units=10, selling_price=5)
    )
    return result.inventory_item.id


class TestDistributionAndRecoveryFlow:
    async def test_sale_profit_and_recovery(self, finished_lot_id):
        sale = await CreateDistributionUseCase().execute(
            CreateDistributionRequest(
                inventory_item_id=finished_lot_id,
                recipient_name="Corner Shop",
                quantity=60,
                unit_price=5,
            )
        )
        assert sale.distribution.total_amount == 300.0
        assert sale.inventory_item.quantity == 0.0

        performance = await AnalyticsUseCase().distribution_performance()
        row = performance.distributions[0]
        assert row.cost_of_goods_sold == 90.0
        assert row.gross_profit == 210.0
        assert row.profit_margin_percent == 70.0
        assert row.product_name == "Rose Soap"

        await RecordPaymentUseCase().execute(
            RecordPaymentRequest(recipient_name="Corner Shop", amount_paid="100")
        )
        summary = await RecoverySummaryUseCase().execute()
        assert summary.total_outstanding == 200.0
        assert summary.recovery_rate == 33.33
        assert summary.recipients[0].outstanding == 200.0

    async def test_oversell_rejected(self, finished_lot_id):
        with pytest.raises(InsufficientStockError):
            await CreateDistributionUseCase().execute(
                CreateDistributionRequest(
                    inventory_item_id=finished_lot_id,
                    recipient_name="Corner Shop",
                    quantity=61,
                    unit_price=5,
                )
            )

        assert (await (await get_inventory_store()).get_item(finished_lot_id)).quantity == 60.0

    async def test_reversal_restocks_and_leaves_reports(self, finished_lot_id):
        sale = await CreateDistributionUseCase().execute(
            CreateDistributionRequest(
                inventory_item_id=finished_lot_id,
                recipient_name="Corner Shop",
                quantity=20,
                unit_price=5,
            )
        )

        result = await ReverseDistributionUseCase().execute(
            sale.distribution.id, ReverseDistributionRequest(reason="damaged")
        )

        assert result.inventory_item.quantity == 60.0
        assert result.transaction.category == "Sales Reversal"

        overview = await AnalyticsUseCase().overview()
        assert overview.distributions.distribution_count == 0
        month = overview.monthly[0]
        assert month.revenue == 100.0
        assert month.expense == 250.0

        summary = await RecoverySummaryUseCase().execute()
        assert summary.total_distributed == 0.0

    async def test_reversal_after_lot_deleted(self, finished_lot_id):
        sale = await CreateDistributionUseCase().execute(
            CreateDistributionRequest(
                inventory_item_id=finished_lot_id,
                recipient_name="Corner Shop",
                quantity=20,
                unit_price=5,
            )
        )
        assert await (await get_inventory_store()).delete_item(finished_lot_id)

        result = await ReverseDistributionUseCase().execute(sale.distribution.id)

        assert result.inventory_item is None
        assert result.restocked_quantity == 0.0
        assert result.distribution.status == "reversed"
        reversals = await (await get_financial_store()).list_transactions()
        assert [t.amount for t in reversals if t.category == "Sales Reversal"] == [100.0]

    async def test_payment_from_unknown_recipient(self, finished_lot_id):
        await CreateDistributionUseCase().execute(
            CreateDistributionRequest(
                inventory_item_id=finished_lot_id,
                recipient_name="Corner Shop",
                quantity=10,
                unit_price=5,
            )
        )
        await RecordPaymentUseCase().execute(
            RecordPaymentRequest(recipient_name="Market Stall", amount_paid=20)
        )

        summary = await RecoverySummaryUseCase().execute()

        assert [r.recipient_name for r in summary.recipients if not r.unmatched] == ["Corner Shop"]
        assert summary.recipients[-1].unmatched is True
        assert summary.total_outstanding == 30.0
        assert summary.total_outstanding == sum(r.outstanding for r in summary.recipients)
