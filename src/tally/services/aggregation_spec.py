from __future__ import annotations

"""
Tests for aggregation.
"""

from datetime import date
from decimal import Decimal

import pytest

from tally.model.entities import Category, Transaction
from tally.services.aggregation import Aggregator, PeriodTotals
from tally.services.bucketing import MonthKey


def _txn(tid: int, amount: str, on: str = "2024-06-10", type: str = "expense", category_id: int = 1) -> Transaction:
    return Transaction(id=tid, amount=amount, category_id=category_id, user_id=1, type=type, date=on)


@pytest.fixture
def mixed_transactions() -> list[Transaction]:
    return [
        _txn(1, "500", category_id=1),
        _txn(2, "400", category_id=1),
        _txn(3, "120.35", category_id=2),
        _txn(4, "3000", type="income", category_id=10),
        _txn(5, "75.10", on="2024-05-31", category_id=1),
        _txn(6, "60", on="2023-06-15", category_id=2),
        _txn(7, "15.05", category_id=3),
    ]


class DescribePeriodTotals:
    def it_should_recompute_savings_at_each_insertion(self):
        totals = PeriodTotals()
        totals = totals.add(_txn(1, "100", type="income"))
        assert totals.savings == Decimal("100")
        totals = totals.add(_txn(2, "30"))
        assert totals.savings == Decimal("70")
        totals = totals.add(_txn(3, "90"))
        assert (totals.income, totals.expense, totals.savings) == (Decimal("100"), Decimal("120"), Decimal("-20"))

    def it_should_not_mutate_the_previous_totals(self):
        before = PeriodTotals()
        after = before.add(_txn(1, "5"))
        assert before.expense == Decimal("0")
        assert after.expense == Decimal("5")


class DescribeRunningTotals:
    def it_should_yield_a_snapshot_after_every_insertion(self):
        txns = [
            _txn(1, "10", on="2024-06-01"),
            _txn(2, "50", on="2024-06-02", type="income"),
            _txn(3, "5", on="2024-07-01"),
            _txn(4, "20", on="2024-06-03"),
        ]

        snapshots = list(Aggregator().running_totals(txns, lambda t: MonthKey.of(t.date)))

        assert [k for k, _ in snapshots] == [
            MonthKey(2024, 6), MonthKey(2024, 6), MonthKey(2024, 7), MonthKey(2024, 6)
        ]
        assert [s.savings for _, s in snapshots] == [
            Decimal("-10"), Decimal("40"), Decimal("-5"), Decimal("20")
        ]

    def it_should_reach_the_same_totals_in_any_visit_order(self, mixed_transactions):
        agg = Aggregator()
        key = lambda t: MonthKey.of(t.date)  # noqa: E731
        forward = agg.fold(mixed_transactions, key)
        backward = agg.fold(list(reversed(mixed_transactions)), key)
        assert forward == backward


class DescribeMonthlyTrend:
    def it_should_return_last_months_oldest_first(self):
        txns = [_txn(i, "10", on=f"2024-{i:02d}-15") for i in range(1, 9)]

        trend = Aggregator().monthly_trend(txns, months=6)

        assert [k for k, _ in trend] == [MonthKey(2024, m) for m in range(3, 9)]
        assert all(t.expense == Decimal("10") for _, t in trend)

    def it_should_split_income_and_expense_per_month(self, mixed_transactions):
        trend = dict(Aggregator().monthly_trend(mixed_transactions))
        june = trend[MonthKey(2024, 6)]
        assert june.income == Decimal("3000")
        assert june.expense == Decimal("1035.40")
        assert june.savings == Decimal("1964.60")


class DescribeWeeklyTotals:
    def it_should_cover_seven_days_with_zero_days(self):
        txns = [
            _txn(1, "20", on="2024-06-02"),
            _txn(2, "100", on="2024-06-05", type="income"),
            _txn(3, "5", on="2024-06-05"),
        ]

        week = Aggregator().weekly_totals(txns, date(2024, 6, 5))

        assert len(week) == 7
        assert [b.label for b, _ in week][3] == "Wed"
        assert week[0][1].expense == Decimal("20")
        assert week[3][1] == PeriodTotals(income=Decimal("100"), expense=Decimal("5"))
        zero_days = [t for _, t in week if t == PeriodTotals()]
        assert len(zero_days) == 5


class DescribeCategorySpend:
    def it_should_sum_expenses_of_one_category_in_one_month(self, mixed_transactions):
        spent = Aggregator().category_spend(mixed_transactions, 1, 6, 2024)
        assert spent == Decimal("900")

    def it_should_ignore_income_and_other_periods(self, mixed_transactions):
        agg = Aggregator()
        assert agg.category_spend(mixed_transactions, 10, 6, 2024) == Decimal("0")
        assert agg.category_spend(mixed_transactions, 2, 6, 2023) == Decimal("60")

    def it_should_partition_total_expense_across_categories(self, mixed_transactions):
        agg = Aggregator()
        category_ids = {t.category_id for t in mixed_transactions}
        for month, year in [(6, 2024), (5, 2024), (6, 2023), (1, 2020)]:
            by_category = sum(agg.category_spend(mixed_transactions, c, month, year) for c in category_ids)
            assert by_category == agg.total_expense(mixed_transactions, month, year)

    def it_should_not_drift_when_summing_many_small_amounts(self):
        txns = [_txn(i, "0.1") for i in range(10)]
        assert Aggregator().category_spend(txns, 1, 6, 2024) == Decimal("1.0")

        many = [_txn(i, "0.01") for i in range(10_000)]
        assert Aggregator().total_expense(many) == Decimal("100.00")


class DescribeSpendByCategory:
    def it_should_match_category_spend(self, mixed_transactions):
        agg = Aggregator()
        spending = agg.spend_by_category(mixed_transactions, 6, 2024)
        assert spending == {1: Decimal("900"), 2: Decimal("120.35"), 3: Decimal("15.05")}

    def it_should_build_spend_summaries_by_category_id(self, mixed_transactions):
        summaries = Aggregator().spend_summaries(mixed_transactions, 6, 2024)
        assert [s.category_id for s in summaries] == [1, 2, 3]
        assert summaries[0].spent == Decimal("900")
        assert (summaries[0].month, summaries[0].year) == (6, 2024)


class DescribeTotals:
    def it_should_total_income_and_expense_over_everything(self, mixed_transactions):
        agg = Aggregator()
        assert agg.total_income(mixed_transactions) == Decimal("3000")
        assert agg.total_expense(mixed_transactions) == Decimal("1170.50")

    def it_should_return_zero_for_empty_input(self):
        agg = Aggregator()
        assert agg.total_income([]) == Decimal("0")
        assert agg.total_expense([]) == Decimal("0")


class DescribeCategoryDistribution:
    def it_should_rank_slices_and_name_unknown_categories(self, mixed_transactions):
        categories = [
            Category(id=1, name="Food", user_id=1, type="expense"),
            Category(id=2, name="Transport", user_id=1, type="expense"),
        ]

        slices = Aggregator().category_distribution(mixed_transactions, categories)

        assert [s.name for s in slices] == ["Food", "Transport", "Unknown"]
        assert slices[0].value == Decimal("975.10")
        assert sum(s.value for s in slices) == Decimal("1170.50")

    def it_should_compute_shares_of_total_expense(self):
        txns = [_txn(1, "75", category_id=1), _txn(2, "25", category_id=2)]
        slices = Aggregator().category_distribution(txns, [])
        assert [s.share for s in slices] == [Decimal("0.75"), Decimal("0.25")]

    def it_should_return_no_slices_without_expenses(self):
        assert Aggregator().category_distribution([_txn(1, "10", type="income")], []) == []
