"""Core domain entities."""

from sims.core.entities.distribution import (
    Distribution,
    DistributionStatus,
    FinancialTransaction,
    TransactionType,
)
from sims.core.entities.inventory import (
    DEFAULT_LOCATION,
    InventoryItem,
    ItemType,
    StockStatus,
)
from sims.core.entities.payment import (
    UNMATCHED_RECIPIENT,
    Payment,
    RecipientBalance,
    RecoverySummary,
)
from sims.core.entities.product import Product
from sims.core.entities.production import (
    CostType,
    FixedCosts,
    MiscellaneousCost,
    ProductionBatch,
    ProductionCost,
    RawMaterialUsage,
)
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

__all__ = [
    # Catalogue
    "Product",
    # Inventory
    "InventoryItem",
    "ItemType",
    "StockStatus",
    "DEFAULT_LOCATION",
    # Production
    "ProductionBatch",
    "ProductionCost",
    "CostType",
    "RawMaterialUsage",
    "FixedCosts",
    "MiscellaneousCost",
    # Distribution
    "Distribution",
    "DistributionStatus",
    "FinancialTransaction",
    "TransactionType",
    # Recovery
    "Payment",
    "RecipientBalance",
    "RecoverySummary",
    "UNMATCHED_RECIPIENT",
    # Reports
    "AnalyticsOverview",
    "AnalyticsSummary",
    "DistributionMetrics",
    "DistributionPerformance",
    "InventoryValuation",
    "MonthlySummary",
    "ProductionProfitability",
    "ProductPerformance",
    "RawMaterialUsageSummary",
]
