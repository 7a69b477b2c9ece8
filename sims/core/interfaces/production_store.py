"""Abstract interface for production batch storage."""

from abc import ABC, abstractmethod

from sims.core.entities.production import ProductionBatch, ProductionCost


class IProductionStore(ABC):
    """Interface for batches and their cost lines."""

    @abstractmethod
    async def create_batch(self, batch: ProductionBatch) -> ProductionBatch:
        """Persist a batch and its cost lines, allocating ids for both."""
        pass

    @abstractmethod
    async def get_batch(self, batch_id: int) -> ProductionBatch | None:
        """Get batch by ID, cost lines included."""
        pass

    @abstractmethod
    async def list_batches(self) -> list[ProductionBatch]:
        """List batches, newest production date first."""
        pass

    @abstractmethod
    async def apply_import(
        self, batch_id: int, accepted_units: float, rejected_units: float
    ) -> ProductionBatch:
        """
        Move accepted + rejected units out of quantity_remaining.

        Single conditional update: raises InsufficientRemainingError when the
        batch no longer has enough remaining units.
        """
        pass

    @abstractmethod
    async def list_costs(self, batch_id: int | None = None) -> list[ProductionCost]:
        pass
