"""
Service layer for Tally.

This module contains the functional core: bucketing, aggregation, budget
evaluation and alert derivation, separated from the imperative shell
(CLI, file storage).

Principles:
- No UI framework imports (Rich, Typer)
- All dependencies injected through constructors
- Functions return data structures, not void
- Fully testable with simple unit tests
"""

from tally.services.aggregation import (
    Aggregator,
    CategorySlice,
    PeriodTotals,
    SpendSummary,
)
from tally.services.alerts import AlertEmitter
from tally.services.bucketing import MonthKey, TemporalBucketer, WeekBucket, week_bounds
from tally.services.budget_evaluator import (
    BudgetEvaluator,
    BudgetState,
    BudgetStatus,
)
from tally.services.budget_service import BudgetReport, BudgetService

__all__ = [
    "Aggregator",
    "AlertEmitter",
    "BudgetEvaluator",
    "BudgetReport",
    "BudgetService",
    "BudgetState",
    "BudgetStatus",
    "CategorySlice",
    "MonthKey",
    "PeriodTotals",
    "SpendSummary",
    "TemporalBucketer",
    "WeekBucket",
    "week_bounds",
]
