"""
Service factory functions for dependency injection.

This module provides factory functions that wire core services for the API
layer. Use cases receive services from here rather than constructing them.
"""

from sims.core.services import FinancialAggregator

# Singleton service instances
_financial_aggregator: FinancialAggregator | None = None


def get_financial_aggregator() -> FinancialAggregator:
    """Get singleton financial aggregator."""
    global _financial_aggregator
    if _financial_aggregator is None:
        _financial_aggregator = FinancialAggregator()
    return _financial_aggregator


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _financial_aggregator
    _financial_aggregator = None
