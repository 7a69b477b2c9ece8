"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Tests replace
these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from sims.application.services import get_financial_aggregator
from sims.application.use_cases import (
    AdjustInventoryUseCase,
    AnalyticsUseCase,
    CreateDistributionUseCase,
    CreateInventoryItemUseCase,
    CreateProductionBatchUseCase,
    CreateProductUseCase,
    ImportProductionBatchUseCase,
    RecordPaymentUseCase,
    RecoverySummaryUseCase,
    ReverseDistributionUseCase,
    UpdatePaymentUseCase,
)
from sims.config import Settings, get_settings
from sims.infrastructure.storage.sqlite import (
    SQLiteDistributionStore,
    SQLiteFinancialStore,
    SQLiteInventoryStore,
    SQLitePaymentStore,
    SQLiteProductionStore,
    SQLiteProductStore,
    get_distribution_store,
    get_financial_store,
    get_inventory_store,
    get_payment_store,
    get_product_store,
    get_production_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_prod_store() -> SQLiteProductStore:
    """Get product store."""
    return await get_product_store()


async def get_inv_item_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_batch_store() -> SQLiteProductionStore:
    """Get production batch store."""
    return await get_production_store()


async def get_dist_store() -> SQLiteDistributionStore:
    """Get distribution store."""
    return await get_distribution_store()


async def get_fin_store() -> SQLiteFinancialStore:
    """Get financial transaction store."""
    return await get_financial_store()


async def get_pay_store() -> SQLitePaymentStore:
    """Get payment store."""
    return await get_payment_store()


# Use case dependencies
def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase()


def get_create_inventory_item_use_case() -> CreateInventoryItemUseCase:
    """Get create inventory item use case."""
    return CreateInventoryItemUseCase(settings=get_app_settings())


def get_adjust_inventory_use_case() -> AdjustInventoryUseCase:
    """Get manual stock adjustment use case."""
    return AdjustInventoryUseCase()


def get_create_batch_use_case() -> CreateProductionBatchUseCase:
    """Get create production batch use case."""
    return CreateProductionBatchUseCase(settings=get_app_settings())


def get_import_batch_use_case() -> ImportProductionBatchUseCase:
    """Get QC import use case."""
    return ImportProductionBatchUseCase(settings=get_app_settings())


def get_create_distribution_use_case() -> CreateDistributionUseCase:
    """Get create distribution use case."""
    return CreateDistributionUseCase()


def get_reverse_distribution_use_case() -> ReverseDistributionUseCase:
    """Get reverse distribution use case."""
    return ReverseDistributionUseCase()


def get_record_payment_use_case() -> RecordPaymentUseCase:
    return RecordPaymentUseCase()


def get_update_payment_use_case() -> UpdatePaymentUseCase:
    return UpdatePaymentUseCase()


def get_recovery_summary_use_case() -> RecoverySummaryUseCase:
    """Get payment recovery summary use case."""
    return RecoverySummaryUseCase()


def get_analytics_use_case() -> AnalyticsUseCase:
    """Get analytics use case."""
    return AnalyticsUseCase(aggregator=get_financial_aggregator())
