"""
Financial aggregator.

Read-only reducers over the ledgers that feed the analytics views. Every
reducer accepts empty input and treats absent numeric values as zero; none
of them raise on incomplete upstream records.
"""

from collections import defaultdict

from sims.config import get_logger
from sims.core.entities.distribution import (
    Distribution,
    FinancialTransaction,
    TransactionType,
)
from sims.core.entities.inventory import InventoryItem, ItemType
from sims.core.entities.product import Product
from sims.core.entities.production import ProductionBatch
from sims.core.entities.report import (
    AnalyticsOverview,
    AnalyticsSummary,
    DistributionMetrics,
    DistributionPerformance,
    InventoryValuation,
    MonthlySummary,
    ProductionProfitability,
    ProductPerformance,
    RawMaterialUsageSummary,
)

logger = get_logger(__name__)

UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_RECIPIENT = "Unknown Recipient"


def _num(value: float | None) -> float:
    return float(value) if value else 0.0


def _margin(profit: float, revenue: float) -> float:
    if not revenue:
        return 0.0
    return round(profit / revenue * 100, 2)


class FinancialAggregator:
    """
    Pure reporting service.

    Holds no state between calls. Reversed distributions are excluded from
    sales figures; their correcting expense still shows in the monthly view.
    """

    def inventory_valuation(self, items: list[InventoryItem]) -> InventoryValuation:
        valuation = InventoryValuation()
        for item in items:
            if item.item_type == ItemType.RAW_MATERIAL:
                valuation.raw_material_value += _num(item.quantity) * _num(item.unit_cost)
                valuation.raw_material_count += 1
            else:
                valuation.finished_goods_value += item.inventory_value
                valuation.finished_goods_count += 1
            if _num(item.quantity) <= _num(item.minimum_stock):
                valuation.low_stock_count += 1

        valuation.total_value = valuation.raw_material_value + valuation.finished_goods_value
        return valuation

    def distribution_metrics(
        self,
        distribution: Distribution,
        items_by_id: dict[int, InventoryItem],
        products_by_id: dict[int, Product],
    ) -> DistributionMetrics:
        """Join one distribution with its lot's cost basis and product name."""
        item = items_by_id.get(distribution.inventory_item_id)
        total = _num(distribution.total_amount)
        cogs = _num(distribution.quantity) * _num(item.unit_cost if item else None)
        gross_profit = total - cogs

        return DistributionMetrics(
            distribution_id=distribution.id,
            inventory_item_id=distribution.inventory_item_id,
            product_id=item.product_id if item else None,
            product_name=self._product_name(item, products_by_id),
            recipient_name=distribution.recipient_name or UNKNOWN_RECIPIENT,
            distribution_date=distribution.distribution_date,
            quantity=_num(distribution.quantity),
            unit_price=_num(distribution.unit_price),
            total_amount=total,
            cost_of_goods_sold=cogs,
            gross_profit=gross_profit,
            profit_margin_percent=_margin(gross_profit, total),
        )

    def distribution_performance(
        self,
        distributions: list[Distribution],
        items: list[InventoryItem],
        products: list[Product] | None = None,
    ) -> DistributionPerformance:
        items_by_id = {item.id: item for item in items if item.id is not None}
        products_by_id = {p.id: p for p in products or [] if p.id is not None}

        rows = [
            self.distribution_metrics(d, items_by_id, products_by_id)
            for d in distributions
            if d.is_active
        ]
        revenue = sum(row.total_amount for row in rows)
        cogs = sum(row.cost_of_goods_sold for row in rows)

        return DistributionPerformance(
            distribution_count=len(rows),
            total_quantity=sum(row.quantity for row in rows),
            total_revenue=revenue,
            total_cost_of_goods_sold=cogs,
            total_gross_profit=revenue - cogs,
            average_order_value=revenue / len(rows) if rows else 0.0,
            distributions=rows,
        )

    def production_profitability(
        self,
        batches: list[ProductionBatch],
        distributions: list[Distribution],
    ) -> ProductionProfitability:
        revenue = sum(_num(d.total_amount) for d in distributions if d.is_active)
        production_cost = sum(_num(b.total_cost) for b in batches)
        profit = revenue - production_cost

        return ProductionProfitability(
            batch_count=len(batches),
            total_units_produced=sum(_num(b.quantity_produced) for b in batches),
            total_units_remaining=sum(_num(b.quantity_remaining) for b in batches),
            total_units_rejected=sum(_num(b.rejected_units) for b in batches),
            total_production_cost=production_cost,
            total_revenue=revenue,
            profit=profit,
            profit_margin_percent=_margin(profit, revenue),
        )

    def monthly_summary(self, transactions: list[FinancialTransaction]) -> list[MonthlySummary]:
        """Group transactions by YYYY-MM, newest month first."""
        months: dict[str, MonthlySummary] = {}
        for txn in transactions:
            if txn.transaction_date is None:
                continue
            key = txn.transaction_date.strftime("%Y-%m")
            summary = months.setdefault(key, MonthlySummary(month=key))
            if txn.transaction_type == TransactionType.REVENUE:
                summary.revenue += _num(txn.amount)
            else:
                summary.expense += _num(txn.amount)
            summary.transaction_count += 1

        for summary in months.values():
            summary.net = summary.revenue - summary.expense

        return sorted(months.values(), key=lambda s: s.month, reverse=True)

    def top_products(
        self,
        distributions: list[Distribution],
        items: list[InventoryItem],
        products: list[Product] | None = None,
        limit: int = 5,
    ) -> list[ProductPerformance]:
        """Rank products by distributed revenue.

        Lots are grouped by their product_id, or by lot name when the lot
        carries no product link.
        """
        items_by_id = {item.id: item for item in items if item.id is not None}
        products_by_id = {p.id: p for p in products or [] if p.id is not None}

        grouped: dict[tuple, ProductPerformance] = {}
        for distribution in distributions:
            if not distribution.is_active:
                continue
            item = items_by_id.get(distribution.inventory_item_id)
            name = self._product_name(item, products_by_id)
            if item is not None and item.product_id is not None:
                key: tuple = ("product", item.product_id)
            else:
                key = ("name", name)

            row = grouped.setdefault(
                key,
                ProductPerformance(
                    product_id=item.product_id if item else None,
                    product_name=name,
                ),
            )
            revenue = _num(distribution.total_amount)
            cogs = _num(distribution.quantity) * _num(item.unit_cost if item else None)
            row.total_sold += _num(distribution.quantity)
            row.total_revenue += revenue
            row.total_profit += revenue - cogs

        ranked = sorted(grouped.values(), key=lambda p: p.total_revenue, reverse=True)
        return ranked[:limit]

    def raw_material_usage(
        self,
        batches: list[ProductionBatch],
        items: list[InventoryItem],
    ) -> list[RawMaterialUsageSummary]:
        """Quantity and cost of each raw material consumed across batches."""
        items_by_id = {item.id: item for item in items if item.id is not None}
        usage: dict[int, RawMaterialUsageSummary] = {}

        for batch in batches:
            for line in batch.raw_materials_used:
                item = items_by_id.get(line.raw_material_id)
                row = usage.get(line.raw_material_id)
                if row is None:
                    row = RawMaterialUsageSummary(
                        raw_material_id=line.raw_material_id,
                        material_name=(
                            line.material_name
                            or (item.name if item else f"Raw material {line.raw_material_id}")
                        ),
                        current_stock=item.quantity if item else None,
                    )
                    usage[line.raw_material_id] = row
                row.total_used += _num(line.quantity)
                row.total_cost_used += line.amount

        return sorted(usage.values(), key=lambda r: r.total_cost_used, reverse=True)

    def overview(
        self,
        items: list[InventoryItem],
        batches: list[ProductionBatch],
        distributions: list[Distribution],
        transactions: list[FinancialTransaction],
        products: list[Product] | None = None,
    ) -> AnalyticsOverview:
        """Every analytics view plus a headline summary block."""
        inventory = self.inventory_valuation(items)
        sales = self.distribution_performance(distributions, items, products)
        production = self.production_profitability(batches, distributions)

        overview = AnalyticsOverview(
            inventory=inventory,
            distributions=sales,
            production=production,
            monthly=self.monthly_summary(transactions),
            top_products=self.top_products(distributions, items, products),
            raw_materials=self.raw_material_usage(batches, items),
            summary=AnalyticsSummary(
                total_inventory_value=inventory.total_value,
                total_revenue=sales.total_revenue,
                total_profit=production.profit,
                total_production_cost=production.total_production_cost,
                total_units_produced=production.total_units_produced,
                low_stock_items=inventory.low_stock_count,
            ),
        )

        logger.debug(
            "analytics_overview_built",
            items=len(items),
            batches=len(batches),
            distributions=len(distributions),
            transactions=len(transactions),
        )
        return overview

    @staticmethod
    def _product_name(
        item: InventoryItem | None,
        products_by_id: dict[int, Product],
    ) -> str:
        if item is None:
            return UNKNOWN_PRODUCT
        product = products_by_id.get(item.product_id) if item.product_id is not None else None
        if product is not None:
            return product.name
        return item.name or UNKNOWN_PRODUCT
