"""
Alert models emitted by the budget engine.

Alerts are plain immutable values. They describe a condition worth telling the
user about; rendering or dispatching them (console line, toast, email) is the
presentation layer's job.

All alerts inherit from AlertEvent and carry:
- a frozen alert_type discriminator
- a severity used by renderers to pick a style
- JSON serialization via Pydantic v2, with Decimal amounts as strings
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from tally.model.entities import parse_money


class AlertSeverity(StrEnum):
    warning = "warning"
    critical = "critical"


class AlertEvent(BaseModel):
    """Base class for all alerts."""

    model_config = ConfigDict(frozen=True)

    alert_type: str
    severity: AlertSeverity

    def message(self) -> str:
        raise NotImplementedError


class BudgetNearLimit(AlertEvent):
    """A category has used at least the near-limit share of its budget."""

    alert_type: str = Field(default="BudgetNearLimit", frozen=True)
    severity: AlertSeverity = AlertSeverity.warning

    category_name: str
    percent_used: Decimal

    @field_validator("percent_used", mode="before")
    @classmethod
    def _parse_percent(cls, value: Any) -> Decimal:
        return parse_money(value)

    @field_serializer("percent_used")
    def _serialize_percent(self, value: Decimal) -> str:
        return str(value)

    def message(self) -> str:
        return f"{self.category_name} has used {self.percent_used:.0f}% of its budget"


class BudgetExceeded(AlertEvent):
    """Spending in a category is above its budget."""

    alert_type: str = Field(default="BudgetExceeded", frozen=True)
    severity: AlertSeverity = AlertSeverity.critical

    category_name: str
    over_amount: Decimal

    @field_validator("over_amount", mode="before")
    @classmethod
    def _parse_over(cls, value: Any) -> Decimal:
        return parse_money(value)

    @field_serializer("over_amount")
    def _serialize_over(self, value: Decimal) -> str:
        return str(value)

    def message(self) -> str:
        return f"{self.category_name} budget exceeded by {self.over_amount:,.2f}"


class ExpensesExceedIncome(AlertEvent):
    """Total expenses across every category are above total income."""

    alert_type: str = Field(default="ExpensesExceedIncome", frozen=True)
    severity: AlertSeverity = AlertSeverity.critical

    total_income: Decimal
    total_expense: Decimal

    @field_validator("total_income", "total_expense", mode="before")
    @classmethod
    def _parse_totals(cls, value: Any) -> Decimal:
        return parse_money(value)

    @field_serializer("total_income", "total_expense")
    def _serialize_totals(self, value: Decimal) -> str:
        return str(value)

    @property
    def shortfall(self) -> Decimal:
        return self.total_expense - self.total_income

    def message(self) -> str:
        return f"Expenses exceed income by {self.shortfall:,.2f}"


__all__ = [
    "AlertEvent",
    "AlertSeverity",
    "BudgetExceeded",
    "BudgetNearLimit",
    "ExpensesExceedIncome",
]
