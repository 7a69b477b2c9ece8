"""Abstract interfaces for storage and infrastructure."""

from sims.core.interfaces.distribution_store import IDistributionStore, IFinancialStore
from sims.core.interfaces.inventory_store import IInventoryStore
from sims.core.interfaces.payment_store import IPaymentStore
from sims.core.interfaces.product_store import IProductStore
from sims.core.interfaces.production_store import IProductionStore
from sims.core.interfaces.sequence_allocator import ISequenceAllocator, SequenceName
from sims.core.interfaces.unit_of_work import IUnitOfWork

__all__ = [
    "IDistributionStore",
    "IFinancialStore",
    "IInventoryStore",
    "IPaymentStore",
    "IProductStore",
    "IProductionStore",
    "ISequenceAllocator",
    "IUnitOfWork",
    "SequenceName",
]
