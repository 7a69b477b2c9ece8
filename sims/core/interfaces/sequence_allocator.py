"""Abstract interface for the identifier allocator."""

from abc import ABC, abstractmethod
from enum import Enum


class SequenceName(str, Enum):
    """Per-entity id sequences."""

    PRODUCT = "productId"
    INVENTORY = "inventoryId"
    PRODUCTION_BATCH = "productionBatchId"
    PRODUCTION_COST = "productionCostId"
    DISTRIBUTION = "distributionId"
    FINANCIAL_TRANSACTION = "financialTransactionId"
    PAYMENT = "paymentId"


class ISequenceAllocator(ABC):
    """Issues strictly increasing integer ids per sequence name."""

    @abstractmethod
    async def next_id(self, sequence_name: str) -> int:
        """Atomically increment and return the sequence; the first value is 1.

        Raises SequenceAllocationError instead of ever returning a fallback id.
        """
        pass
