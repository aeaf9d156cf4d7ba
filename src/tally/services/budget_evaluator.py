"""
Budget evaluation - compares monthly category spend against budgets.

For each budget of the reference month the evaluator reports how much was
spent, the spent/amount ratio and a state:

- over:  spent > amount
- near:  spent >= NEAR_LIMIT_RATIO * amount (spent == amount is still near)
- under: anything below that
- error: the budget could not be evaluated (see BudgetStatus.error)

Bad budgets never raise here. A non-positive amount, a category that is not
among the supplied categories, or a budget on an income category produce an
error status carrying a CoreError, with the spend still reported.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer

Evaluation is a pure function of its inputs: no caching, no hidden state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from tally.config import NEAR_LIMIT_RATIO
from tally.model.entities import Budget, Category, EntryType, Transaction, find_category
from tally.model.errors import CoreError, InvalidPeriodError
from tally.services.aggregation import ZERO, Aggregator

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


class BudgetState(StrEnum):
    under = "under"
    near = "near"
    over = "over"
    error = "error"


@dataclass(frozen=True)
class BudgetStatus:
    """A budget with its actual spending comparison."""

    budget: Budget
    spent: Decimal
    ratio: Decimal | None  # None when state is error
    state: BudgetState
    error: CoreError | None = None

    @property
    def is_error(self) -> bool:
        return self.state == BudgetState.error

    @property
    def percent_used(self) -> Decimal | None:
        """Unclamped share of the budget used, in percent."""
        return None if self.ratio is None else self.ratio * HUNDRED

    @property
    def progress_percent(self) -> Decimal:
        """Share used for progress bars, clamped to 100."""
        if self.ratio is None:
            return ZERO
        return min(self.ratio * HUNDRED, HUNDRED)

    @property
    def exceeded_by(self) -> Decimal:
        return self.spent - self.budget.amount if self.state == BudgetState.over else ZERO

    @property
    def remaining(self) -> Decimal:
        return self.budget.amount - self.spent


def classify(spent: Decimal, amount: Decimal) -> BudgetState:
    """Classify spending against a positive budget amount."""
    if spent > amount:
        return BudgetState.over
    if spent >= NEAR_LIMIT_RATIO * amount:
        return BudgetState.near
    return BudgetState.under


class BudgetEvaluator:
    """Evaluates monthly budgets against transactions."""

    def __init__(self, aggregator: Aggregator | None = None):
        self.aggregator = aggregator or Aggregator()

    def evaluate(
        self,
        budgets: list[Budget],
        transactions: list[Transaction],
        categories: list[Category],
        month: int,
        year: int,
    ) -> list[BudgetStatus]:
        """
        Evaluate every budget of the reference month.

        Args:
            budgets: All budgets; those of other months are skipped
            transactions: Transactions to aggregate (any order)
            categories: Categories the budgets refer to
            month: Reference month (1-12)
            year: Reference year

        Returns:
            One BudgetStatus per matching budget, in input order

        Raises:
            InvalidPeriodError: month is outside 1-12
        """
        if not 1 <= month <= 12:
            raise InvalidPeriodError(f"Month must be between 1 and 12, got {month}")

        spending = self.aggregator.spend_by_category(transactions, month, year)
        statuses = []

        for budget in budgets:
            if budget.month != month or budget.year != year:
                continue
            spent = spending.get(budget.category_id, ZERO)
            statuses.append(self._evaluate_one(budget, spent, categories))

        logger.debug(
            "Evaluated %d budget(s) for %04d-%02d", len(statuses), year, month
        )
        return statuses

    def _evaluate_one(
        self,
        budget: Budget,
        spent: Decimal,
        categories: list[Category],
    ) -> BudgetStatus:
        error = self._check_budget(budget, categories)
        if error is not None:
            logger.warning("Budget %s not evaluated: %s", budget.id, error.message)
            return BudgetStatus(
                budget=budget, spent=spent, ratio=None, state=BudgetState.error, error=error
            )

        return BudgetStatus(
            budget=budget,
            spent=spent,
            ratio=spent / budget.amount,
            state=classify(spent, budget.amount),
        )

    def _check_budget(self, budget: Budget, categories: list[Category]) -> CoreError | None:
        if budget.amount <= 0:
            return CoreError.validation(
                f"Budget amount must be positive, got {budget.amount}", budget.id
            )

        category = find_category(categories, budget.category_id)
        if category is None:
            return CoreError.not_found(
                f"Category {budget.category_id} does not exist", budget.category_id
            )
        if category.type != EntryType.expense:
            return CoreError.validation(
                f"Category '{category.name}' is an income category", budget.category_id
            )
        return None


__all__ = [
    "BudgetEvaluator",
    "BudgetState",
    "BudgetStatus",
    "classify",
]
