"""
Analytics Use Case.

Loads the ledgers, narrows them to an optional date range and hands them to
the read-only FinancialAggregator. Inventory is a point-in-time snapshot and
is never date-filtered.
"""

from datetime import date

from sims.config import get_logger
from sims.core.entities.distribution import Distribution
from sims.core.entities.production import ProductionBatch
from sims.core.entities.report import (
    AnalyticsOverview,
    DistributionPerformance,
    InventoryValuation,
    MonthlySummary,
    ProductionProfitability,
)
from sims.core.exceptions import InvalidInputError
from sims.core.interfaces import (
    IDistributionStore,
    IFinancialStore,
    IInventoryStore,
    IProductionStore,
    IProductStore,
)
from sims.core.services.financial_aggregator import FinancialAggregator

logger = get_logger(__name__)


def _in_range(value: date | None, start_date: date | None, end_date: date | None) -> bool:
    if value is None:
        return start_date is None and end_date is None
    if start_date is not None and value < start_date:
        return False
    if end_date is not None and value > end_date:
        return False
    return True


class AnalyticsUseCase:
    """Reporting entry point for the analytics endpoints."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        production_store: IProductionStore | None = None,
        distribution_store: IDistributionStore | None = None,
        financial_store: IFinancialStore | None = None,
        product_store: IProductStore | None = None,
        aggregator: FinancialAggregator | None = None,
    ):
        self._inventory_store = inventory_store
        self._production_store = production_store
        self._distribution_store = distribution_store
        self._financial_store = financial_store
        self._product_store = product_store
        self._aggregator = aggregator or FinancialAggregator()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from sims.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_production_store(self) -> IProductionStore:
        if self._production_store is None:
            from sims.infrastructure.storage.sqlite import get_production_store

            self._production_store = await get_production_store()
        return self._production_store

    async def _get_distribution_store(self) -> IDistributionStore:
        if self._distribution_store is None:
            from sims.infrastructure.storage.sqlite import get_distribution_store

            self._distribution_store = await get_distribution_store()
        return self._distribution_store

    async def _get_financial_store(self) -> IFinancialStore:
        if self._financial_store is None:
            from sims.infrastructure.storage.sqlite import get_financial_store

            self._financial_store = await get_financial_store()
        return self._financial_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from sims.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    @staticmethod
    def _check_range(start_date: date | None, end_date: date | None) -> None:
        if start_date and end_date and start_date > end_date:
            raise InvalidInputError(
                field="start_date",
                message="must not be after end_date",
                value=start_date.isoformat(),
            )

    async def _distributions(
        self, start_date: date | None, end_date: date | None
    ) -> list[Distribution]:
        distributions = await (await self._get_distribution_store()).list_distributions()
        return [d for d in distributions if _in_range(d.distribution_date, start_date, end_date)]

    async def _batches(
        self, start_date: date | None, end_date: date | None
    ) -> list[ProductionBatch]:
        batches = await (await self._get_production_store()).list_batches()
        return [b for b in batches if _in_range(b.production_date, start_date, end_date)]

    async def overview(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> AnalyticsOverview:
        """Every analytics view, optionally restricted to a date range."""
        self._check_range(start_date, end_date)

        items = await (await self._get_inventory_store()).list_items()
        products = await (await self._get_product_store()).list_products()
        batches = await self._batches(start_date, end_date)
        distributions = await self._distributions(start_date, end_date)
        transactions = await (await self._get_financial_store()).list_transactions(
            start_date=start_date, end_date=end_date
        )

        overview = self._aggregator.overview(items, batches, distributions, transactions, products)
        logger.info(
            "analytics_overview_served",
            start_date=start_date,
            end_date=end_date,
            total_revenue=overview.summary.total_revenue,
        )
        return overview

    async def monthly(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[MonthlySummary]:
        self._check_range(start_date, end_date)
        transactions = await (await self._get_financial_store()).list_transactions(
            start_date=start_date, end_date=end_date
        )
        return self._aggregator.monthly_summary(transactions)

    async def inventory_valuation(self) -> InventoryValuation:
        items = await (await self._get_inventory_store()).list_items()
        return self._aggregator.inventory_valuation(items)

    async def distribution_performance(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> DistributionPerformance:
        self._check_range(start_date, end_date)
        items = await (await self._get_inventory_store()).list_items()
        products = await (await self._get_product_store()).list_products()
        distributions = await self._distributions(start_date, end_date)
        return self._aggregator.distribution_performance(distributions, items, products)

    async def production_profitability(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ProductionProfitability:
        self._check_range(start_date, end_date)
        batches = await self._batches(start_date, end_date)
        distributions = await self._distributions(start_date, end_date)
        return self._aggregator.production_profitability(batches, distributions)
