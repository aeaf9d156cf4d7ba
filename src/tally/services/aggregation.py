"""
Aggregation - running income/expense/savings totals and category spend.

All sums are Decimal. Totals are folded in one transaction at a time into an
explicit accumulator map keyed by bucket; each insertion produces a new
PeriodTotals, so a caller can display the running figure after every step.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TypeVar

from tally.config import TREND_MONTHS
from tally.model.entities import Category, Transaction, find_category
from tally.services.bucketing import MonthKey, TemporalBucketer, WeekBucket

K = TypeVar("K", bound=Hashable)

ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense folded into one bucket."""

    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def savings(self) -> Decimal:
        return self.income - self.expense

    def add(self, txn: Transaction) -> PeriodTotals:
        """Return new totals with txn folded in."""
        if txn.is_income:
            return PeriodTotals(income=self.income + txn.amount, expense=self.expense)
        return PeriodTotals(income=self.income, expense=self.expense + txn.amount)


@dataclass(frozen=True)
class SpendSummary:
    """Expense total of one category in one calendar month."""

    category_id: int
    month: int
    year: int
    spent: Decimal


@dataclass(frozen=True)
class CategorySlice:
    """One slice of the expense distribution by category."""

    category_id: int
    name: str
    value: Decimal
    share: Decimal  # fraction of all expenses, 0..1


def _in_period(txn: Transaction, month: int | None, year: int | None) -> bool:
    if year is not None and txn.date.year != year:
        return False
    return not (month is not None and txn.date.month != month)


class Aggregator:
    """Sums transaction amounts per bucket, per category and overall."""

    def __init__(self, bucketer: TemporalBucketer | None = None):
        self.bucketer = bucketer or TemporalBucketer()

    # ---- Running totals ----

    def running_totals(
        self,
        transactions: Iterable[Transaction],
        key: Callable[[Transaction], K],
    ) -> Iterator[tuple[K, PeriodTotals]]:
        """
        Fold transactions in visit order, yielding each bucket's totals
        right after the transaction was added to it.
        """
        acc: dict[K, PeriodTotals] = {}
        for txn in transactions:
            k = key(txn)
            acc[k] = acc.get(k, PeriodTotals()).add(txn)
            yield k, acc[k]

    def fold(
        self,
        transactions: Iterable[Transaction],
        key: Callable[[Transaction], K],
    ) -> dict[K, PeriodTotals]:
        """Fold transactions into a map of bucket key -> final totals."""
        acc: dict[K, PeriodTotals] = {}
        for k, totals in self.running_totals(transactions, key):
            acc[k] = totals
        return acc

    def monthly_trend(
        self,
        transactions: Iterable[Transaction],
        months: int = TREND_MONTHS,
    ) -> list[tuple[MonthKey, PeriodTotals]]:
        """
        Income/expense/savings per month, oldest first, limited to the last
        `months` months that have activity.
        """
        totals = self.fold(transactions, lambda t: MonthKey.of(t.date))
        return [(k, totals[k]) for k in self.bucketer.recent_months(totals, months)]

    def weekly_totals(
        self,
        transactions: Iterable[Transaction],
        reference: date,
    ) -> list[tuple[WeekBucket, PeriodTotals]]:
        """Income/expense per day of reference's week; always seven entries."""
        result = []
        for bucket in self.bucketer.bucket_by_week(transactions, reference):
            totals = PeriodTotals()
            for txn in bucket.transactions:
                totals = totals.add(txn)
            result.append((bucket, totals))
        return result

    # ---- Category and overall sums ----

    def category_spend(
        self,
        transactions: Iterable[Transaction],
        category_id: int,
        month: int,
        year: int,
    ) -> Decimal:
        """Sum of expense amounts for one category in one calendar month."""
        return sum(
            (
                t.amount
                for t in transactions
                if t.is_expense and t.category_id == category_id and _in_period(t, month, year)
            ),
            ZERO,
        )

    def spend_by_category(
        self,
        transactions: Iterable[Transaction],
        month: int,
        year: int,
    ) -> dict[int, Decimal]:
        """Expense totals of every category with spending in the month."""
        spending: dict[int, Decimal] = {}
        for t in transactions:
            if t.is_expense and _in_period(t, month, year):
                spending[t.category_id] = spending.get(t.category_id, ZERO) + t.amount
        return spending

    def spend_summaries(
        self,
        transactions: Iterable[Transaction],
        month: int,
        year: int,
    ) -> list[SpendSummary]:
        """SpendSummary per category with spending in the month, by category id."""
        spending = self.spend_by_category(transactions, month, year)
        return [
            SpendSummary(category_id=cid, month=month, year=year, spent=spending[cid])
            for cid in sorted(spending)
        ]

    def total_expense(
        self,
        transactions: Iterable[Transaction],
        month: int | None = None,
        year: int | None = None,
    ) -> Decimal:
        """Sum of all expense amounts, optionally restricted to a month/year."""
        return sum((t.amount for t in transactions if t.is_expense and _in_period(t, month, year)), ZERO)

    def total_income(
        self,
        transactions: Iterable[Transaction],
        month: int | None = None,
        year: int | None = None,
    ) -> Decimal:
        """Sum of all income amounts, optionally restricted to a month/year."""
        return sum((t.amount for t in transactions if t.is_income and _in_period(t, month, year)), ZERO)

    def category_distribution(
        self,
        transactions: Iterable[Transaction],
        categories: list[Category],
    ) -> list[CategorySlice]:
        """
        Expense distribution across categories, largest slice first.

        Categories missing from `categories` are named "Unknown" but still
        counted, so the slices always add up to total expense.
        """
        spending: dict[int, Decimal] = {}
        for t in transactions:
            if t.is_expense:
                spending[t.category_id] = spending.get(t.category_id, ZERO) + t.amount

        total = sum(spending.values(), ZERO)
        slices = []
        for cid, value in spending.items():
            cat = find_category(categories, cid)
            slices.append(
                CategorySlice(
                    category_id=cid,
                    name=cat.name if cat else "Unknown",
                    value=value,
                    share=(value / total) if total > 0 else ZERO,
                )
            )
        slices.sort(key=lambda s: (-s.value, s.category_id))
        return slices


__all__ = [
    "Aggregator",
    "CategorySlice",
    "PeriodTotals",
    "SpendSummary",
]
