"""Payment and recovery entities."""

from datetime import date, datetime

from pydantic import BaseModel, Field

UNMATCHED_RECIPIENT = "Unmatched payments"


class Payment(BaseModel):
    """Money received from a recipient; matched to balances by name."""

    id: int | None = None
    distribution_id: int | None = None  # informational only
    recipient_name: str
    recipient_type: str = "distributor"
    amount_paid: float = 0.0
    payment_date: date = Field(default_factory=date.today)
    payment_method: str = "cash"
    proof_reference: str | None = None
    notes: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)


class RecipientBalance(BaseModel):
    recipient_name: str
    recipient_type: str = "distributor"
    total_distributed: float = 0.0
    total_paid: float = 0.0
    outstanding: float = 0.0
    distribution_count: int = 0
    unmatched: bool = False


class RecoverySummary(BaseModel):
    total_distributed: float = 0.0
    total_recovered: float = 0.0
    total_outstanding: float = 0.0
    recovery_rate: float = 0.0  # percent
    recipients: list[RecipientBalance] = Field(default_factory=list)
