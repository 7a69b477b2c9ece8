"""Read-only report views produced by the financial aggregator."""

from datetime import date

from pydantic import BaseModel, Field


class InventoryValuation(BaseModel):
    raw_material_value: float = 0.0
    finished_goods_value: float = 0.0
    total_value: float = 0.0
    raw_material_count: int = 0
    finished_goods_count: int = 0
    low_stock_count: int = 0


class DistributionMetrics(BaseModel):
    """A distribution joined with its lot's cost basis."""

    distribution_id: int | None = None
    inventory_item_id: int | None = None
    product_id: int | None = None
    product_name: str = "Unknown Product"
    recipient_name: str = "Unknown Recipient"
    distribution_date: date | None = None
    quantity: float = 0.0
    unit_price: float = 0.0
    total_amount: float = 0.0
    cost_of_goods_sold: float = 0.0
    gross_profit: float = 0.0
    profit_margin_percent: float = 0.0


class DistributionPerformance(BaseModel):
    distribution_count: int = 0
    total_quantity: float = 0.0
    total_revenue: float = 0.0
    total_cost_of_goods_sold: float = 0.0
    total_gross_profit: float = 0.0
    average_order_value: float = 0.0
    distributions: list[DistributionMetrics] = Field(default_factory=list)


class ProductionProfitability(BaseModel):
    batch_count: int = 0
    total_units_produced: float = 0.0
    total_units_remaining: float = 0.0
    total_units_rejected: float = 0.0
    total_production_cost: float = 0.0
    total_revenue: float = 0.0
    profit: float = 0.0
    profit_margin_percent: float = 0.0


class MonthlySummary(BaseModel):
    month: str  # YYYY-MM
    revenue: float = 0.0
    expense: float = 0.0
    net: float = 0.0
    transaction_count: int = 0


class ProductPerformance(BaseModel):
    product_id: int | None = None
    product_name: str = "Unknown Product"
    total_sold: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0


class RawMaterialUsageSummary(BaseModel):
    raw_material_id: int
    material_name: str
    total_used: float = 0.0
    total_cost_used: float = 0.0
    current_stock: float | None = None


class AnalyticsSummary(BaseModel):
    total_inventory_value: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    total_production_cost: float = 0.0
    total_units_produced: float = 0.0
    low_stock_items: int = 0


class AnalyticsOverview(BaseModel):
    inventory: InventoryValuation = Field(default_factory=InventoryValuation)
    distributions: DistributionPerformance = Field(default_factory=DistributionPerformance)
    production: ProductionProfitability = Field(default_factory=ProductionProfitability)
    monthly: list[MonthlySummary] = Field(default_factory=list)
    top_products: list[ProductPerformance] = Field(default_factory=list)
    raw_materials: list[RawMaterialUsageSummary] = Field(default_factory=list)
    summary: AnalyticsSummary = Field(default_factory=AnalyticsSummary)
