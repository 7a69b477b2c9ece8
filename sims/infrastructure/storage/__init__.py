"""Storage infrastructure implementations."""

from sims.infrastructure.storage.sqlite import (
    SQLiteDistributionStore,
    SQLiteFinancialStore,
    SQLiteInventoryStore,
    SQLitePaymentStore,
    SQLiteProductionStore,
    SQLiteProductStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteProductStore",
    "SQLiteInventoryStore",
    "SQLiteProductionStore",
    "SQLiteDistributionStore",
    "SQLiteFinancialStore",
    "SQLitePaymentStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
