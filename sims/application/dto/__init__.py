"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from sims.application.dto.requests import (
    AdjustInventoryRequest,
    CostLineRequest,
    CreateDistributionRequest,
    CreateInventoryItemRequest,
    CreateProductionBatchRequest,
    CreateProductRequest,
    FixedCostsRequest,
    ImportBatchRequest,
    MiscellaneousCostRequest,
    RawMaterialUsageRequest,
    RecordPaymentRequest,
    ReverseDistributionRequest,
    UpdateInventoryItemRequest,
    UpdatePaymentRequest,
    UpdateProductRequest,
)
from sims.application.dto.responses import (
    ApiResponse,
    CreateDistributionResponse,
    DistributionResponse,
    ErrorResponse,
    FinancialTransactionResponse,
    HealthResponse,
    ImportBatchResponse,
    InventoryItemResponse,
    PaymentResponse,
    ProductionBatchResponse,
    ProductionCostResponse,
    ProductResponse,
    ProviderHealthResponse,
    ReverseDistributionResponse,
)

__all__ = [
    # Requests
    "AdjustInventoryRequest",
    "CostLineRequest",
    "CreateDistributionRequest",
    "CreateInventoryItemRequest",
    "CreateProductionBatchRequest",
    "CreateProductRequest",
    "FixedCostsRequest",
    "ImportBatchRequest",
    "MiscellaneousCostRequest",
    "RawMaterialUsageRequest",
    "RecordPaymentRequest",
    "ReverseDistributionRequest",
    "UpdateInventoryItemRequest",
    "UpdatePaymentRequest",
    "UpdateProductRequest",
    # Responses
    "ApiResponse",
    "CreateDistributionResponse",
    "DistributionResponse",
    "ErrorResponse",
    "FinancialTransactionResponse",
    "HealthResponse",
    "ImportBatchResponse",
    "InventoryItemResponse",
    "PaymentResponse",
    "ProductionBatchResponse",
    "ProductionCostResponse",
    "ProductResponse",
    "ProviderHealthResponse",
    "ReverseDistributionResponse",
]
