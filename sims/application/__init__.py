"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Providing factory functions for dependency injection

Use cases are the only entry point for multi-step API operations.
"""

from sims.application.services import get_financial_aggregator, reset_services
from sims.application.use_cases import (
    AdjustInventoryUseCase,
    AnalyticsUseCase,
    CreateDistributionUseCase,
    CreateInventoryItemUseCase,
    CreateProductionBatchUseCase,
    ImportProductionBatchUseCase,
    RecordPaymentUseCase,
    RecoverySummaryUseCase,
    ReverseDistributionUseCase,
    UpdatePaymentUseCase,
)

__all__ = [
    # Services
    "get_financial_aggregator",
    "reset_services",
    # Use cases
    "CreateInventoryItemUseCase",
    "AdjustInventoryUseCase",
    "CreateProductionBatchUseCase",
    "ImportProductionBatchUseCase",
    "CreateDistributionUseCase",
    "ReverseDistributionUseCase",
    "RecordPaymentUseCase",
    "UpdatePaymentUseCase",
    "RecoverySummaryUseCase",
    "AnalyticsUseCase",
]
