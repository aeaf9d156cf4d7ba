from __future__ import annotations

"""
Canonical entity models for Tally.

Scope
- Pure Pydantic v2 models for transactions, categories and monthly budgets.
- Money is held as Decimal; numbers and strings are parsed through str so that
  binary float noise never reaches an aggregate.
- No I/O here (handled by ledger_io.py and config_io.py).

Entities are frozen. Changing a record means replacing it through the store.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class EntryType(StrEnum):
    """Direction of money for transactions and categories."""

    income = "income"
    expense = "expense"


def parse_money(value: Any) -> Decimal:
    """Convert a str/int/float/Decimal into an exact Decimal.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1")
    rather than the 55-digit binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("amount must be a number, not a boolean")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def parse_calendar_date(value: Any) -> Any:
    """Accept dates, datetimes and ISO timestamps; keep only the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError as e:
            raise ValueError(f"Malformed date: {value!r}") from e
    return value


class Transaction(BaseModel):
    """One income or expense entry owned by a user."""

    model_config = ConfigDict(frozen=True)

    id: int
    amount: Decimal = Field(ge=0, description="Non-negative amount in currency units")
    category_id: int
    user_id: int
    type: EntryType
    date: date
    description: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> Decimal:
        return parse_money(value)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return parse_calendar_date(value)

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> str:
        """Serialize Decimal to string to preserve precision."""
        return str(value)

    @property
    def is_expense(self) -> bool:
        return self.type == EntryType.expense

    @property
    def is_income(self) -> bool:
        return self.type == EntryType.income


class Category(BaseModel):
    """User-defined category for either income or expense transactions."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)
    user_id: int
    type: EntryType


class Budget(BaseModel):
    """Spending ceiling for one category in one calendar month."""

    model_config = ConfigDict(frozen=True)

    id: int
    amount: Decimal = Field(gt=0, description="Budget amount in currency units")
    category_id: int
    user_id: int
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1, le=9999)

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> Decimal:
        return parse_money(value)

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return str(value)

    @property
    def period(self) -> tuple[int, int]:
        return (self.year, self.month)


def find_category(categories: list[Category], category_id: int) -> Category | None:
    """Find a category by id, or None if it is not among the supplied ones."""
    for cat in categories:
        if cat.id == category_id:
            return cat
    return None


__all__ = [
    "Budget",
    "Category",
    "EntryType",
    "Transaction",
    "find_category",
    "parse_calendar_date",
    "parse_money",
]
