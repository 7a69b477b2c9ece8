"""Abstract interface for payment storage."""

from abc import ABC, abstractmethod
from typing import Any

from sims.core.entities.payment import Payment


class IPaymentStore(ABC):
    """Interface for payment persistence."""

    @abstractmethod
    async def create_payment(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_payment(self, payment_id: int) -> Payment | None:
        pass

    @abstractmethod
    async def list_payments(
        self,
        distribution_id: int | None = None,
        recipient_name: str | None = None,
    ) -> list[Payment]:
        """List payments, newest first, optionally filtered."""
        pass

    @abstractmethod
    async def update_payment(self, payment_id: int, fields: dict[str, Any]) -> Payment:
        """Apply a partial update; raises PaymentNotFoundError."""
        pass

    @abstractmethod
    async def delete_payment(self, payment_id: int) -> bool:
        pass
