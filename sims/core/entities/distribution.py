"""Distribution (sale) and financial transaction entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class DistributionStatus(str, Enum):
    COMPLETED = "completed"
    REVERSED = "reversed"


class TransactionType(str, Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


class Distribution(BaseModel):
    """Sale of finished goods from one inventory lot to a recipient."""

    id: int | None = None
    inventory_item_id: int  # weak ref → inventory_items.id
    recipient_name: str
    recipient_contact: str | None = None
    quantity: float
    unit_price: float
    total_amount: float = 0.0  # quantity * unit_price
    distribution_date: date = Field(default_factory=date.today)
    notes: str = ""
    status: DistributionStatus = DistributionStatus.COMPLETED
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def compute_total(self) -> "Distribution":
        self.total_amount = self.quantity * self.unit_price
        return self

    @property
    def is_active(self) -> bool:
        return self.status == DistributionStatus.COMPLETED


class FinancialTransaction(BaseModel):
    """Revenue or expense record booked as a side effect of other operations."""

    id: int | None = None
    transaction_type: TransactionType
    amount: float
    description: str = ""
    category: str = ""
    distribution_id: int | None = None
    batch_id: int | None = None
    transaction_date: date = Field(default_factory=date.today)
    created_at: datetime = Field(default_factory=datetime.utcnow)
