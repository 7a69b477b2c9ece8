"""Abstract interfaces for distribution and financial transaction storage."""

from abc import ABC, abstractmethod
from datetime import date

from sims.core.entities.distribution import (
    Distribution,
    DistributionStatus,
    FinancialTransaction,
)


class IDistributionStore(ABC):
    """Interface for distribution persistence."""

    @abstractmethod
    async def create_distribution(self, distribution: Distribution) -> Distribution:
        pass

    @abstractmethod
    async def get_distribution(self, distribution_id: int) -> Distribution | None:
        pass

    @abstractmethod
    async def list_distributions(self) -> list[Distribution]:
        """List distributions, newest first."""
        pass

    @abstractmethod
    async def set_status(
        self, distribution_id: int, status: DistributionStatus
    ) -> Distribution:
        pass

    @abstractmethod
    async def delete_distribution(self, distribution_id: int) -> bool:
        """Remove the record only; stock and transactions are untouched."""
        pass


class IFinancialStore(ABC):
    """Interface for revenue/expense transaction persistence."""

    @abstractmethod
    async def add_transaction(self, transaction: FinancialTransaction) -> FinancialTransaction:
        pass

    @abstractmethod
    async def list_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> list[FinancialTransaction]:
        """List transactions, newest first, optionally within a date range."""
        pass

    @abstractmethod
    async def list_for_distribution(self, distribution_id: int) -> list[FinancialTransaction]:
        pass
