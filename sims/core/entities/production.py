"""Production batch entities and their cost lines."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class CostType(str, Enum):
    """Cost line categories recorded against a batch."""

    RAW_MATERIAL = "raw_material"
    OVERHEAD = "overhead"
    MISCELLANEOUS = "miscellaneous"


class RawMaterialUsage(BaseModel):
    """Quantity of one raw material consumed by a batch."""

    raw_material_id: int
    quantity: float
    unit_cost: float | None = None  # defaults to the ledger item's unit_cost
    material_name: str | None = None

    @property
    def amount(self) -> float:
        return self.quantity * (self.unit_cost or 0.0)


class FixedCosts(BaseModel):
    labor: float = 0.0
    electricity: float = 0.0
    packing: float = 0.0
    advertising: float = 0.0

    def items(self) -> list[tuple[str, float]]:
        return [(name, float(value)) for name, value in self.model_dump().items()]


class MiscellaneousCost(BaseModel):
    description: str
    amount: float


class ProductionCost(BaseModel):
    """A single cost line of a batch; immutable once the batch exists."""

    id: int | None = None
    batch_id: int | None = None
    cost_type: CostType
    item_name: str
    quantity: float | None = None  # counts as 1 when absent
    unit_cost: float
    raw_material_id: int | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def amount(self) -> float:
        quantity = self.quantity if self.quantity is not None else 1.0
        return quantity * self.unit_cost


class ProductionBatch(BaseModel):
    """One production run with its cost accounting and QC counters."""

    id: int | None = None
    batch_number: str
    product_id: int
    product_name: str | None = None
    quantity_produced: float
    quantity_remaining: float
    rejected_units: float = 0.0
    raw_materials_used: list[RawMaterialUsage] = Field(default_factory=list)
    fixed_costs: FixedCosts = Field(default_factory=FixedCosts)
    miscellaneous_costs: list[MiscellaneousCost] = Field(default_factory=list)
    costs: list[ProductionCost] = Field(default_factory=list)
    total_cost: float = 0.0
    cost_per_unit: float = 0.0
    production_date: date = Field(default_factory=date.today)
    notes: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def units_released(self) -> float:
        """Units that passed QC and became inventory lots."""
        return self.quantity_produced - self.quantity_remaining - self.rejected_units
