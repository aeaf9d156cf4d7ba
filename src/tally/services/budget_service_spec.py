from __future__ import annotations

"""
Tests for the budget service facade.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import Mock

import pytest

from tally.model.alerts import BudgetNearLimit, ExpensesExceedIncome
from tally.model.entities import Budget, Category, Transaction
from tally.model.errors import InvalidPeriodError
from tally.services.bucketing import MonthKey
from tally.services.budget_evaluator import BudgetState
from tally.services.budget_service import BudgetService
from tally.storage.ledger_store import LedgerStore


def _source(transactions=(), budgets=(), categories=()) -> Mock:
    source = Mock(spec=LedgerStore)
    source.list_transactions.return_value = list(transactions)
    source.list_budgets.return_value = list(budgets)
    source.list_categories.return_value = list(categories)
    return source


FOOD = Category(id=1, name="Food", user_id=1, type="expense")
SALARY = Category(id=2, name="Salary", user_id=1, type="income")


def _txn(tid: int, amount: str, on: str, type: str = "expense", category_id: int = 1) -> Transaction:
    return Transaction(id=tid, amount=amount, category_id=category_id, user_id=1, type=type, date=on)


class DescribeBudgetService:
    def it_should_build_report_for_requested_month(self):
        source = _source(
            transactions=[
                _txn(1, "500", "2024-06-03"),
                _txn(2, "400", "2024-06-20"),
                _txn(3, "2000", "2024-06-01", type="income", category_id=2),
                _txn(4, "50", "2024-05-01"),
            ],
            budgets=[Budget(id=1, amount="1000", category_id=1, user_id=1, month=6, year=2024)],
            categories=[FOOD, SALARY],
        )

        report = BudgetService(source).get_report(1, month=6, year=2024)

        source.list_transactions.assert_called_once_with(1)
        assert [s.state for s in report.statuses] == [BudgetState.near]
        assert report.alerts == [BudgetNearLimit(category_name="Food", percent_used="90")]
        assert report.total_income == Decimal("2000")
        assert report.total_expense == Decimal("950")
        assert report.balance == Decimal("1050")
        assert report.month_expense == Decimal("900")
        assert report.month_income == Decimal("2000")
        assert report.over_budget_count == 0
        assert report.error_count == 0

    def it_should_default_to_current_month(self):
        report = BudgetService(_source()).get_report(1)
        today = date.today()
        assert (report.month, report.year) == (today.month, today.year)
        assert report.statuses == []

    def it_should_include_global_alert(self):
        source = _source(
            transactions=[_txn(1, "6000", "2024-06-03"), _txn(2, "5000", "2024-06-01", type="income", category_id=2)],
            categories=[FOOD, SALARY],
        )

        report = BudgetService(source).get_report(1, month=6, year=2024)

        assert isinstance(report.alerts[-1], ExpensesExceedIncome)
        assert report.balance == Decimal("-1000")

    def it_should_surface_duplicate_budgets(self):
        budgets = [
            Budget(id=1, amount="100", category_id=1, user_id=1, month=6, year=2024),
            Budget(id=2, amount="200", category_id=1, user_id=1, month=6, year=2024),
        ]
        report = BudgetService(_source(budgets=budgets, categories=[FOOD])).get_report(1, 6, 2024)

        assert [[b.id for b in g] for g in report.duplicate_budgets] == [[1, 2]]
        assert len(report.statuses) == 2

    def it_should_propagate_invalid_period(self):
        with pytest.raises(InvalidPeriodError):
            BudgetService(_source()).get_report(1, month=14, year=2024)

    def it_should_delegate_trend_week_and_distribution(self):
        source = _source(
            transactions=[_txn(1, "10", "2024-06-02"), _txn(2, "20", "2024-06-05")],
            categories=[FOOD],
        )
        service = BudgetService(source)

        trend = service.get_trend(1, months=6)
        week = service.get_week(1, date(2024, 6, 5))
        slices = service.get_distribution(1)

        assert trend[0][0] == MonthKey(2024, 6)
        assert trend[0][1].expense == Decimal("30")
        assert len(week) == 7
        assert slices[0].name == "Food"
        assert slices[0].value == Decimal("30")
