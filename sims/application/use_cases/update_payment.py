"""Update Payment Use Case - partial update with the same rules as recording."""

from sims.application.dto.requests import UpdatePaymentRequest
from sims.application.dto.responses import PaymentResponse
from sims.application.use_cases.record_payment import parse_amount
from sims.config import get_logger
from sims.core.entities.payment import Payment
from sims.core.exceptions import InvalidInputError, PaymentNotFoundError
from sims.core.interfaces.payment_store import IPaymentStore

logger = get_logger(__name__)

# Columns that cannot be cleared by sending null
NON_NULLABLE = {"recipient_name", "recipient_type", "payment_date", "payment_method", "notes"}


class UpdatePaymentUseCase:
    """Apply a partial update to a recorded payment."""

    def __init__(self, payment_store: IPaymentStore | None = None):
        self._payment_store = payment_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from sims.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def execute(self, payment_id: int, request: UpdatePaymentRequest) -> Payment:
        """Execute update payment use case."""
        fields = request.to_fields()

        for name in NON_NULLABLE & set(fields):
            if fields[name] is None:
                raise InvalidInputError(field=name, message="cannot be null")
        if "recipient_name" in fields:
            if not fields["recipient_name"].strip():
                raise InvalidInputError(field="recipient_name", message="is required")
            fields["recipient_name"] = fields["recipient_name"].strip()
        if "amount_paid" in fields:
            fields["amount_paid"] = parse_amount(fields["amount_paid"])

        store = await self._get_payment_store()
        if await store.get_payment(payment_id) is None:
            raise PaymentNotFoundError(payment_id)

        payment = await store.update_payment(payment_id, fields)
        logger.info("payment_update_complete", payment_id=payment_id, fields=sorted(fields))
        return payment

    def to_response(self, payment: Payment) -> PaymentResponse:
        return PaymentResponse.from_entity(payment)
