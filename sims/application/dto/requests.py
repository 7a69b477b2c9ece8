"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Every field accepts its snake_case name or the camelCase spelling used by
older clients (``quantity_produced`` or ``quantityProduced``). Business rules
(positive quantities, required names) are enforced by the use cases so that
in-process callers get the same InvalidInputError as HTTP callers; only
non-finite numbers are refused here.
"""

from datetime import date
from typing import Any

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sims.core.entities.inventory import ItemType
from sims.core.entities.production import CostType


def _snake_or_camel(field_name: str) -> AliasChoices:
    return AliasChoices(field_name, to_camel(field_name))


class RequestModel(BaseModel):
    """Base for request DTOs: snake_case canonical, camelCase tolerated.

    NaN and infinity are rejected for every float field.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=_snake_or_camel),
        populate_by_name=True,
        allow_inf_nan=False,
    )

    def to_fields(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller, for partial updates."""
        return self.model_dump(exclude_unset=True)


# --- Products ---


class CreateProductRequest(RequestModel):
    """Request to add a product to the catalogue."""

    name: str | None = Field(default=None, description="Product name", examples=["Rose Soap"])
    category: str | None = Field(default=None, description="Product category or type")
    description: str | None = Field(default=None, description="Free-text description")
    idea_creation_date: date | None = Field(default=None, description="When the idea was logged")
    production_start_date: date | None = Field(default=None, description="First production date")
    is_active: bool = Field(default=True, description="Whether the product is in the range")


class UpdateProductRequest(RequestModel):
    """Partial product update; only supplied fields change."""

    name: str | None = None
    category: str | None = None
    description: str | None = None
    idea_creation_date: date | None = None
    production_start_date: date | None = None
    is_active: bool | None = None


# --- Inventory ---


class CreateInventoryItemRequest(RequestModel):
    """Request to create a raw material or finished-goods record."""

    item_type: ItemType | None = Field(
        default=None,
        description="raw_material or finished_product",
        examples=["raw_material"],
    )
    name: str | None = Field(default=None, description="Item name", examples=["Olive oil"])
    quantity: float | None = Field(default=None, description="Opening stock quantity")
    unit_cost: float | None = Field(default=None, description="Cost per unit")
    selling_price: float | None = Field(default=None, description="Selling price (finished goods)")
    minimum_stock: float = Field(default=0.0, description="Low-stock threshold")
    location: str | None = Field(default=None, description="Storage location")
    supplier: str | None = Field(default=None, description="Supplier name")
    barcode: str | None = Field(default=None, description="Barcode; usable as lookup key")
    notes: str | None = Field(default=None, description="Additional notes")
    batch_id: int | None = Field(default=None, description="Source production batch")
    batch_number: str | None = Field(default=None, description="Source batch label")
    product_id: int | None = Field(default=None, description="Catalogue product")


class UpdateInventoryItemRequest(RequestModel):
    """Partial inventory update.

    Unknown keys are passed through so the ledger can reject them explicitly
    (for example an attempt to overwrite ``id``).
    """

    model_config = ConfigDict(extra="allow")

    item_type: ItemType | None = None
    name: str | None = None
    quantity: float | None = None
    unit_cost: float | None = None
    selling_price: float | None = None
    minimum_stock: float | None = None
    location: str | None = None
    supplier: str | None = None
    barcode: str | None = None
    notes: str | None = None
    batch_id: int | None = None
    batch_number: str | None = None
    product_id: int | None = None

    def to_fields(self) -> dict[str, Any]:
        fields = super().to_fields()
        fields.update(self.model_extra or {})
        return fields


class AdjustInventoryRequest(RequestModel):
    """Manual stock adjustment by a signed delta."""

    delta: float | None = Field(default=None, description="Signed quantity change", examples=[-5])
    allow_negative: bool = Field(
        default=False,
        description="Permit the resulting quantity to drop below zero",
    )
    reason: str | None = Field(default=None, description="Why the adjustment was made")


# --- Production ---


class RawMaterialUsageRequest(RequestModel):
    """One raw material consumed by a batch."""

    raw_material_id: int = Field(..., description="Inventory id of the raw material")
    quantity: float = Field(..., description="Quantity consumed")
    unit_cost: float | None = Field(
        default=None,
        description="Cost per unit (defaults to the ledger item's unit cost)",
    )
    material_name: str | None = Field(default=None, description="Display name")


class FixedCostsRequest(RequestModel):
    """Fixed costs of a production run."""

    labor: float = 0.0
    electricity: float = 0.0
    packing: float = 0.0
    advertising: float = 0.0


class MiscellaneousCostRequest(RequestModel):
    """Free-form cost of a production run."""

    description: str
    amount: float


class CostLineRequest(RequestModel):
    """Pre-computed cost line; authoritative when supplied."""

    cost_type: CostType = Field(default=CostType.OVERHEAD)
    item_name: str
    quantity: float | None = Field(default=None, description="Counts as 1 when absent")
    unit_cost: float = 0.0
    raw_material_id: int | None = None


class CreateProductionBatchRequest(RequestModel):
    """Request to record a production run."""

    batch_number: str | None = Field(
        default=None,
        description="Batch label (generated when absent)",
        examples=["BATCH-20260115-1A2B3C"],
    )
    product_id: int | None = Field(default=None, description="Catalogue product id")
    product_name: str | None = Field(default=None, description="Product name override")
    quantity_produced: float | None = Field(default=None, description="Units produced (> 0)")
    production_date: date | None = Field(default=None, description="Defaults to today")
    raw_materials_used: list[RawMaterialUsageRequest] = Field(default_factory=list)
    fixed_costs: FixedCostsRequest = Field(default_factory=FixedCostsRequest)
    miscellaneous_costs: list[MiscellaneousCostRequest] = Field(default_factory=list)
    costs: list[CostLineRequest] | None = Field(
        default=None,
        description="Pre-computed cost lines; take precedence over structured costs",
    )
    total_cost: float | None = Field(
        default=None,
        description="Used only when no cost lines can be derived",
    )
    notes: str | None = None


class ImportBatchRequest(RequestModel):
    """Quality-control release of batch units into finished-goods stock."""

    accepted_units: float | None = Field(default=None, description="Units passing QC (> 0)")
    rejected_units: float = Field(default=0.0, description="Units failing QC (>= 0)")
    selling_price: float | None = Field(default=None, description="Lot selling price (> 0)")
    location: str | None = Field(default=None, description="Defaults to Main Warehouse")
    notes: str | None = None


# --- Distribution ---


class CreateDistributionRequest(RequestModel):
    """Request to record a sale of finished goods."""

    inventory_item_id: int | None = Field(default=None, description="Finished-goods lot id")
    recipient_name: str | None = Field(default=None, description="Who received the goods")
    recipient_contact: str | None = Field(default=None, description="Phone or email")
    quantity: float | None = Field(default=None, description="Units distributed (> 0)")
    unit_price: float | None = Field(default=None, description="Price per unit (> 0)")
    distribution_date: date | None = Field(default=None, description="Defaults to today")
    notes: str | None = None


class ReverseDistributionRequest(RequestModel):
    """Correction of a recorded distribution."""

    reason: str | None = Field(default=None, description="Why the sale is reversed")


# --- Payments ---


class RecordPaymentRequest(RequestModel):
    """Payment received from a recipient."""

    recipient_name: str | None = Field(default=None, description="Paying recipient")
    recipient_type: str | None = Field(default=None, description="Defaults to distributor")
    amount_paid: Any = Field(
        default=None,
        description="Amount received; numbers or numeric strings",
        examples=[100, "250.50"],
    )
    payment_date: date | None = Field(default=None, description="Defaults to today")
    payment_method: str | None = Field(default=None, description="Defaults to cash")
    distribution_id: int | None = Field(default=None, description="Informational link")
    proof_reference: str | None = Field(default=None, description="Receipt or transfer ref")
    notes: str | None = None


class UpdatePaymentRequest(RequestModel):
    """Partial payment update."""

    recipient_name: str | None = None
    recipient_type: str | None = None
    amount_paid: Any = None
    payment_date: date | None = None
    payment_method: str | None = None
    distribution_id: int | None = None
    proof_reference: str | None = None
    notes: str | None = None
