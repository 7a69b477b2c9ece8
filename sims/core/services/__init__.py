"""
Core business logic services.

Layer-pure services that depend only on:
- sims/core/entities/*
- sims/core/exceptions.py

NO infrastructure imports.
"""

from sims.core.services.costing import (
    build_cost_lines,
    compute_cost_per_unit,
    consumption_from_cost_lines,
    fallback_cost_lines,
    generate_batch_number,
    sum_cost_lines,
)
from sims.core.services.financial_aggregator import FinancialAggregator
from sims.core.services.recovery import build_recovery_summary

__all__ = [
    # Costing
    "build_cost_lines",
    "compute_cost_per_unit",
    "consumption_from_cost_lines",
    "fallback_cost_lines",
    "generate_batch_number",
    "sum_cost_lines",
    # Recovery
    "build_recovery_summary",
    # Reporting
    "FinancialAggregator",
]
