"""Application use cases."""

from sims.application.use_cases.adjust_inventory import AdjustInventoryUseCase
from sims.application.use_cases.analytics import AnalyticsUseCase
from sims.application.use_cases.create_distribution import (
    CreateDistributionResult,
    CreateDistributionUseCase,
)
from sims.application.use_cases.create_inventory_item import CreateInventoryItemUseCase
from sims.application.use_cases.create_product import CreateProductUseCase
from sims.application.use_cases.create_production_batch import (
    CreateProductionBatchResult,
    CreateProductionBatchUseCase,
)
from sims.application.use_cases.import_production_batch import (
    ImportBatchResult,
    ImportProductionBatchUseCase,
)
from sims.application.use_cases.record_payment import RecordPaymentUseCase
from sims.application.use_cases.recovery_summary import RecoverySummaryUseCase
from sims.application.use_cases.reverse_distribution import (
    ReverseDistributionResult,
    ReverseDistributionUseCase,
)
from sims.application.use_cases.update_payment import UpdatePaymentUseCase

__all__ = [
    "CreateProductUseCase",
    "CreateInventoryItemUseCase",
    "AdjustInventoryUseCase",
    "CreateProductionBatchUseCase",
    "CreateProductionBatchResult",
    "ImportProductionBatchUseCase",
    "ImportBatchResult",
    "CreateDistributionUseCase",
    "CreateDistributionResult",
    "ReverseDistributionUseCase",
    "ReverseDistributionResult",
    "RecordPaymentUseCase",
    "UpdatePaymentUseCase",
    "RecoverySummaryUseCase",
    "AnalyticsUseCase",
]
