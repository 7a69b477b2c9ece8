"""Record Payment Use Case."""

import math
from typing import Any

from sims.application.dto.requests import RecordPaymentRequest
from sims.application.dto.responses import PaymentResponse
from sims.config import get_logger
from sims.core.entities.payment import Payment
from sims.core.exceptions import InvalidInputError
from sims.core.interfaces.payment_store import IPaymentStore

logger = get_logger(__name__)


def parse_amount(value: Any) -> float:
    """Parse amount_paid from a number or numeric string; must be finite and >= 0."""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(field="amount_paid", message="is required", value=value)
    try:
        amount = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(field="amount_paid", message="must be a number", value=value) from e
    if math.isnan(amount) or math.isinf(amount):
        raise InvalidInputError(field="amount_paid", message="must be a finite number", value=value)
    if amount < 0:
        raise InvalidInputError(field="amount_paid", message="cannot be negative", value=value)
    return amount


class RecordPaymentUseCase:
    """
    Record money received from a recipient.

    Payments are matched to balances by recipient name only; they are not
    checked against any particular distribution.
    """

    def __init__(self, payment_store: IPaymentStore | None = None):
        self._payment_store = payment_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from sims.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def execute(self, request: RecordPaymentRequest) -> Payment:
        """Execute record payment use case."""
        if not request.recipient_name or not request.recipient_name.strip():
            raise InvalidInputError(field="recipient_name", message="is required")
        amount = parse_amount(request.amount_paid)

        payment = Payment(
            recipient_name=request.recipient_name.strip(),
            recipient_type=request.recipient_type or "distributor",
            amount_paid=amount,
            payment_method=request.payment_method or "cash",
            distribution_id=request.distribution_id,
            proof_reference=request.proof_reference,
            notes=request.notes or "",
        )
        if request.payment_date:
            payment.payment_date = request.payment_date

        store = await self._get_payment_store()
        payment = await store.create_payment(payment)

        logger.info(
            "payment_recorded",
            payment_id=payment.id,
            recipient=payment.recipient_name,
            amount=payment.amount_paid,
        )
        return payment

    def to_response(self, payment: Payment) -> PaymentResponse:
        return PaymentResponse.from_entity(payment)
