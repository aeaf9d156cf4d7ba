from __future__ import annotations

"""
Budget Service - business logic behind the dashboard views

Pulls a user's snapshot from the storage collaborator and runs it through the
bucketing, aggregation, evaluation and alert components.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol, Tuple

from tally.config import TREND_MONTHS
from tally.model.alerts import AlertEvent
from tally.model.entities import Budget, Category, Transaction
from tally.services.aggregation import Aggregator, CategorySlice, PeriodTotals
from tally.services.alerts import AlertEmitter
from tally.services.bucketing import MonthKey, TemporalBucketer, WeekBucket
from tally.services.budget_evaluator import BudgetEvaluator, BudgetState, BudgetStatus
from tally.services.category_rules import find_duplicate_budgets

logger = logging.getLogger(__name__)


class BudgetDataSource(Protocol):
    """The read side of the storage collaborator."""

    def list_transactions(self, user_id: int) -> List[Transaction]: ...

    def list_budgets(self, user_id: int) -> List[Budget]: ...

    def list_categories(self, user_id: int) -> List[Category]: ...


@dataclass
class BudgetReport:
    """Budget statuses, alerts and headline totals for one month."""

    month: int
    year: int
    statuses: List[BudgetStatus]
    alerts: List[AlertEvent]
    total_income: Decimal
    total_expense: Decimal
    month_income: Decimal
    month_expense: Decimal
    duplicate_budgets: List[List[Budget]] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def over_budget_count(self) -> int:
        return sum(1 for s in self.statuses if s.state == BudgetState.over)

    @property
    def error_count(self) -> int:
        return sum(1 for s in self.statuses if s.is_error)


class BudgetService:
    """Service for budget reports, trends and distributions."""

    def __init__(
        self,
        source: BudgetDataSource,
        aggregator: Optional[Aggregator] = None,
    ):
        """
        Initialize the budget service.

        Args:
            source: Storage collaborator providing list_* snapshots
            aggregator: Aggregator to share with the evaluator and emitter
        """
        self.source = source
        self.aggregator = aggregator or Aggregator(TemporalBucketer())
        self.evaluator = BudgetEvaluator(self.aggregator)
        self.emitter = AlertEmitter(self.aggregator)

    def get_report(
        self,
        user_id: int,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> BudgetReport:
        """
        Evaluate the user's budgets for a month.

        Args:
            user_id: Owner of the data
            month: Reference month (default: current month)
            year: Reference year (default: current year)

        Returns:
            BudgetReport

        Raises:
            InvalidPeriodError: month is outside 1-12
        """
        today = date.today()
        month = today.month if month is None else month
        year = today.year if year is None else year

        transactions = self.source.list_transactions(user_id)
        budgets = self.source.list_budgets(user_id)
        categories = self.source.list_categories(user_id)

        statuses = self.evaluator.evaluate(budgets, transactions, categories, month, year)
        alerts = list(self.emitter.derive_alerts(statuses, categories, transactions))

        duplicates = find_duplicate_budgets(budgets)
        for group in duplicates:
            logger.warning(
                "Duplicate budgets %s for category %d in %04d-%02d",
                [b.id for b in group],
                group[0].category_id,
                group[0].year,
                group[0].month,
            )

        return BudgetReport(
            month=month,
            year=year,
            statuses=statuses,
            alerts=alerts,
            total_income=self.aggregator.total_income(transactions),
            total_expense=self.aggregator.total_expense(transactions),
            month_income=self.aggregator.total_income(transactions, month, year),
            month_expense=self.aggregator.total_expense(transactions, month, year),
            duplicate_budgets=duplicates,
        )

    def get_trend(
        self,
        user_id: int,
        months: int = TREND_MONTHS,
    ) -> List[Tuple[MonthKey, PeriodTotals]]:
        """Monthly income/expense/savings, oldest first, last `months` months."""
        return self.aggregator.monthly_trend(self.source.list_transactions(user_id), months)

    def get_week(
        self,
        user_id: int,
        reference: Optional[date] = None,
    ) -> List[Tuple[WeekBucket, PeriodTotals]]:
        """Daily income/expense of the week containing reference (default: today)."""
        reference = reference or date.today()
        return self.aggregator.weekly_totals(self.source.list_transactions(user_id), reference)

    def get_distribution(self, user_id: int) -> List[CategorySlice]:
        """Expense distribution across the user's categories."""
        return self.aggregator.category_distribution(
            self.source.list_transactions(user_id),
            self.source.list_categories(user_id),
        )


__all__ = ["BudgetDataSource", "BudgetReport", "BudgetService"]
