"""
Temporal bucketing - groups transactions into week-day and month-year buckets.

Weeks start on Sunday. A weekly view always has seven buckets, Sun..Sat, so
days without activity still show up (as empty buckets). Monthly buckets are
keyed by (year, month), which keeps the same month of different years apart.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer

Pure functions over in-memory lists; the input is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import NamedTuple

from tally.model.entities import Transaction

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class MonthKey(NamedTuple):
    """Bucket key for one calendar month. Sorts chronologically."""

    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{MONTH_LABELS[self.month - 1]} {self.year}"

    @classmethod
    def of(cls, d: date) -> MonthKey:
        return cls(d.year, d.month)


@dataclass
class WeekBucket:
    """One day of a Sunday-based week."""

    offset: int  # 0 = Sunday .. 6 = Saturday
    day: date
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def label(self) -> str:
        return DAY_LABELS[self.offset]

    @property
    def is_empty(self) -> bool:
        return not self.transactions


def week_bounds(reference: date) -> tuple[date, date]:
    """Return (Sunday, Saturday) of the week containing reference, inclusive."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = reference - timedelta(days=(reference.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


class TemporalBucketer:
    """Partitions transactions into period buckets."""

    def bucket_by_week(
        self,
        transactions: Iterable[Transaction],
        reference: date,
    ) -> list[WeekBucket]:
        """
        Bucket transactions into the seven days of reference's week.

        Args:
            transactions: Transactions to partition (any order)
            reference: Any date inside the week to show

        Returns:
            Exactly seven WeekBuckets, Sunday first. Transactions outside
            [Sunday, Saturday] are left out.
        """
        start, end = week_bounds(reference)
        buckets = [WeekBucket(offset=i, day=start + timedelta(days=i)) for i in range(7)]

        for txn in transactions:
            if start <= txn.date <= end:
                buckets[(txn.date - start).days].transactions.append(txn)

        return buckets

    def bucket_by_month(
        self,
        transactions: Iterable[Transaction],
    ) -> dict[MonthKey, list[Transaction]]:
        """
        Bucket every transaction by its calendar month.

        Returns:
            Dict of MonthKey -> transactions, keys in chronological order.
            Within a bucket transactions keep their visit order.
        """
        buckets: dict[MonthKey, list[Transaction]] = {}
        for txn in transactions:
            buckets.setdefault(MonthKey.of(txn.date), []).append(txn)
        return {key: buckets[key] for key in sorted(buckets)}

    def recent_months(self, keys: Iterable[MonthKey], count: int) -> list[MonthKey]:
        """Return the last `count` month keys in chronological order."""
        if count <= 0:
            return []
        return sorted(keys)[-count:]


__all__ = [
    "DAY_LABELS",
    "MonthKey",
    "TemporalBucketer",
    "WeekBucket",
    "week_bounds",
]
