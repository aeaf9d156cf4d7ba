"""
Alert emission - turns budget statuses into alert events.

The emitter only describes conditions; it sends nothing. Alerts follow the
order of the statuses they come from, and the global "expenses exceed income"
alert, which looks at the whole transaction set, always comes last.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tally.model.alerts import AlertEvent, BudgetExceeded, BudgetNearLimit, ExpensesExceedIncome
from tally.model.entities import Category, Transaction, find_category
from tally.services.aggregation import Aggregator
from tally.services.budget_evaluator import BudgetState, BudgetStatus


class AlertEmitter:
    """Derives alert events from budget statuses and overall totals."""

    def __init__(self, aggregator: Aggregator | None = None):
        self.aggregator = aggregator or Aggregator()

    def derive_alerts(
        self,
        statuses: Iterable[BudgetStatus],
        categories: list[Category],
        transactions: Iterable[Transaction] = (),
    ) -> Iterator[AlertEvent]:
        """
        Lazily yield alerts for the given statuses.

        Args:
            statuses: Budget statuses, typically from BudgetEvaluator.evaluate
            categories: Categories used to name the alerts
            transactions: Full transaction set for the income/expense check

        Yields:
            BudgetNearLimit / BudgetExceeded per status, then at most one
            ExpensesExceedIncome
        """
        for status in statuses:
            if status.state not in (BudgetState.near, BudgetState.over):
                continue
            category = find_category(categories, status.budget.category_id)
            name = category.name if category else f"Category {status.budget.category_id}"

            if status.state == BudgetState.near:
                yield BudgetNearLimit(category_name=name, percent_used=status.percent_used)
            else:
                yield BudgetExceeded(category_name=name, over_amount=status.exceeded_by)

        txns = list(transactions)
        total_income = self.aggregator.total_income(txns)
        total_expense = self.aggregator.total_expense(txns)
        if total_expense > total_income:
            yield ExpensesExceedIncome(total_income=total_income, total_expense=total_expense)


__all__ = ["AlertEmitter"]
