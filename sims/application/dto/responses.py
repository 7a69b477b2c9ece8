"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.

Every payload travels inside the envelope
``{success, data, error, message, details}``.
"""

from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from sims.core.entities.distribution import Distribution, FinancialTransaction
from sims.core.entities.inventory import InventoryItem
from sims.core.entities.payment import Payment
from sims.core.entities.product import Product
from sims.core.entities.production import ProductionBatch, ProductionCost
from sims.core.entities.report import DistributionMetrics

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    data: T | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error envelope.

    - error: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - details: structured context from the raised error
    - hint: suggested recovery action
    """

    success: bool = False
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    details: dict[str, Any] | None = Field(default=None, description="Structured context")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


# --- Products ---


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str | None = None
    description: str | None = None
    idea_creation_date: date | None = None
    production_start_date: date | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls.model_validate(product.model_dump())


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory record with derived stock status and value."""

    id: int
    item_type: str
    name: str
    quantity: float
    unit_cost: float | None = None
    selling_price: float | None = None
    minimum_stock: float
    location: str
    supplier: str | None = None
    barcode: str | None = None
    notes: str
    batch_id: int | None = None
    batch_number: str | None = None
    product_id: int | None = None
    stock_status: str
    inventory_value: float
    last_updated: datetime
    created_at: datetime

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls.model_validate(
            {
                **item.model_dump(mode="json"),
                "stock_status": item.stock_status.value,
                "inventory_value": item.inventory_value,
            }
        )


# --- Production ---


class ProductionCostResponse(BaseModel):
    id: int | None = None
    cost_type: str
    item_name: str
    quantity: float | None = None
    unit_cost: float
    raw_material_id: int | None = None
    amount: float

    @classmethod
    def from_entity(cls, cost: ProductionCost) -> "ProductionCostResponse":
        return cls(
            id=cost.id,
            cost_type=cost.cost_type.value,
            item_name=cost.item_name,
            quantity=cost.quantity,
            unit_cost=cost.unit_cost,
            raw_material_id=cost.raw_material_id,
            amount=cost.amount,
        )


class ProductionBatchResponse(BaseModel):
    """Production batch with cost lines and QC counters."""

    id: int
    batch_number: str
    product_id: int
    product_name: str | None = None
    quantity_produced: float
    quantity_remaining: float
    rejected_units: float
    units_released: float
    raw_materials_used: list[dict[str, Any]] = Field(default_factory=list)
    fixed_costs: dict[str, float] = Field(default_factory=dict)
    miscellaneous_costs: list[dict[str, Any]] = Field(default_factory=list)
    costs: list[ProductionCostResponse] = Field(default_factory=list)
    total_cost: float
    cost_per_unit: float
    production_date: date
    notes: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, batch: ProductionBatch) -> "ProductionBatchResponse":
        data = batch.model_dump(exclude={"costs"})
        return cls.model_validate(
            {
                **data,
                "units_released": batch.units_released,
                "costs": [ProductionCostResponse.from_entity(c) for c in batch.costs],
            }
        )


class ImportBatchResponse(BaseModel):
    """New finished-goods lot plus the batch counters after the import."""

    inventory_item: InventoryItemResponse
    batch_id: int
    batch_number: str
    quantity_remaining: float
    rejected_units: float
    accepted_units: float
    rejected_in_import: float


# --- Distribution ---


class DistributionResponse(BaseModel):
    """Distribution with read-time profit figures."""

    id: int
    inventory_item_id: int
    product_name: str
    recipient_name: str
    recipient_contact: str | None = None
    quantity: float
    unit_price: float
    total_amount: float
    distribution_date: date
    notes: str
    status: str
    cost_of_goods_sold: float
    gross_profit: float
    profit_margin_percent: float
    created_at: datetime

    @classmethod
    def from_entity(
        cls, distribution: Distribution, metrics: DistributionMetrics
    ) -> "DistributionResponse":
        return cls.model_validate(
            {
                **distribution.model_dump(mode="json"),
                "product_name": metrics.product_name,
                "cost_of_goods_sold": metrics.cost_of_goods_sold,
                "gross_profit": metrics.gross_profit,
                "profit_margin_percent": metrics.profit_margin_percent,
            }
        )


class FinancialTransactionResponse(BaseModel):
    id: int
    transaction_type: str
    amount: float
    description: str
    category: str
    distribution_id: int | None = None
    batch_id: int | None = None
    transaction_date: date
    created_at: datetime

    @classmethod
    def from_entity(cls, txn: FinancialTransaction) -> "FinancialTransactionResponse":
        return cls.model_validate(txn.model_dump(mode="json"))


class CreateDistributionResponse(BaseModel):
    distribution: DistributionResponse
    transaction: FinancialTransactionResponse
    remaining_stock: float


class ReverseDistributionResponse(BaseModel):
    distribution: DistributionResponse
    transaction: FinancialTransactionResponse
    restocked_quantity: float


# --- Payments ---


class PaymentResponse(BaseModel):
    id: int
    distribution_id: int | None = None
    recipient_name: str
    recipient_type: str
    amount_paid: float
    payment_date: date
    payment_method: str
    proof_reference: str | None = None
    notes: str
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponse":
        return cls.model_validate(payment.model_dump(mode="json"))
