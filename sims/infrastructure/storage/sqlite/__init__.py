"""SQLite storage implementations."""

from sims.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    check_connection,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from sims.infrastructure.storage.sqlite.distribution_store import SQLiteDistributionStore
from sims.infrastructure.storage.sqlite.financial_store import SQLiteFinancialStore
from sims.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from sims.infrastructure.storage.sqlite.payment_store import SQLitePaymentStore
from sims.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from sims.infrastructure.storage.sqlite.production_store import SQLiteProductionStore
from sims.infrastructure.storage.sqlite.sequence_allocator import SQLiteSequenceAllocator
from sims.infrastructure.storage.sqlite.unit_of_work import SQLiteUnitOfWork

# Singleton instances
_allocator: SQLiteSequenceAllocator | None = None
_product_store: SQLiteProductStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_production_store: SQLiteProductionStore | None = None
_distribution_store: SQLiteDistributionStore | None = None
_financial_store: SQLiteFinancialStore | None = None
_payment_store: SQLitePaymentStore | None = None
_unit_of_work: SQLiteUnitOfWork | None = None


def get_sequence_allocator() -> SQLiteSequenceAllocator:
    """Get singleton sequence allocator instance."""
    global _allocator
    if _allocator is None:
        _allocator = SQLiteSequenceAllocator()
    return _allocator


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore(get_sequence_allocator())
    return _product_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore(get_sequence_allocator())
    return _inventory_store


async def get_production_store() -> SQLiteProductionStore:
    """Get singleton production store instance."""
    global _production_store
    if _production_store is None:
        _production_store = SQLiteProductionStore(get_sequence_allocator())
    return _production_store


async def get_distribution_store() -> SQLiteDistributionStore:
    """Get singleton distribution store instance."""
    global _distribution_store
    if _distribution_store is None:
        _distribution_store = SQLiteDistributionStore(get_sequence_allocator())
    return _distribution_store


async def get_financial_store() -> SQLiteFinancialStore:
    """Get singleton financial transaction store instance."""
    global _financial_store
    if _financial_store is None:
        _financial_store = SQLiteFinancialStore(get_sequence_allocator())
    return _financial_store


async def get_payment_store() -> SQLitePaymentStore:
    """Get singleton payment store instance."""
    global _payment_store
    if _payment_store is None:
        _payment_store = SQLitePaymentStore(get_sequence_allocator())
    return _payment_store


def get_unit_of_work() -> SQLiteUnitOfWork:
    """Get singleton unit of work."""
    global _unit_of_work
    if _unit_of_work is None:
        _unit_of_work = SQLiteUnitOfWork()
    return _unit_of_work


def reset_stores() -> None:
    """Drop singleton stores (for testing)."""
    global _allocator, _product_store, _inventory_store, _production_store
    global _distribution_store, _financial_store, _payment_store, _unit_of_work
    _allocator = None
    _product_store = None
    _inventory_store = None
    _production_store = None
    _distribution_store = None
    _financial_store = None
    _payment_store = None
    _unit_of_work = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "check_connection",
    # Store classes
    "SQLiteSequenceAllocator",
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteProductionStore",
    "SQLiteDistributionStore",
    "SQLiteFinancialStore",
    "SQLitePaymentStore",
    "SQLiteUnitOfWork",
    # Factory functions
    "get_sequence_allocator",
    "get_product_store",
    "get_inventory_store",
    "get_production_store",
    "get_distribution_store",
    "get_financial_store",
    "get_payment_store",
    "get_unit_of_work",
    "reset_stores",
]
