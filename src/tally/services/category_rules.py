"""
Category rules - starter categories and consistency checks.

Checks return CoreError values (or lists of offending records) instead of
raising; the store decides which of them block a write.
"""

from __future__ import annotations

from collections.abc import Iterable

from tally.model.entities import Budget, Category, EntryType, Transaction, find_category
from tally.model.errors import CoreError

# Categories created for every new user.
DEFAULT_EXPENSE_CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Utilities",
    "Housing",
    "Healthcare",
    "Entertainment",
    "Shopping",
    "Education",
    "Personal Care",
    "Others",
]

DEFAULT_INCOME_CATEGORIES = [
    "Salary",
    "Business",
    "Investments",
    "Freelance",
    "Other Income",
]


def default_category_specs() -> list[tuple[str, EntryType]]:
    """(name, type) pairs of the starter categories, expenses first."""
    return [(name, EntryType.expense) for name in DEFAULT_EXPENSE_CATEGORIES] + [
        (name, EntryType.income) for name in DEFAULT_INCOME_CATEGORIES
    ]


def check_category_type(txn: Transaction, categories: list[Category]) -> CoreError | None:
    """A transaction must point at an existing category of the same type."""
    category = find_category(categories, txn.category_id)
    if category is None:
        return CoreError.not_found(f"Category {txn.category_id} does not exist", txn.category_id)
    if category.type != txn.type:
        return CoreError.validation(
            f"Category '{category.name}' is for {category.type} but transaction is {txn.type}",
            txn.id,
        )
    return None


def find_duplicate_budgets(budgets: Iterable[Budget]) -> list[list[Budget]]:
    """Groups of budgets sharing (user, category, month, year), in first-seen order."""
    groups: dict[tuple[int, int, int, int], list[Budget]] = {}
    for b in budgets:
        groups.setdefault((b.user_id, b.category_id, b.year, b.month), []).append(b)
    return [group for group in groups.values() if len(group) > 1]


__all__ = [
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_INCOME_CATEGORIES",
    "check_category_type",
    "default_category_specs",
    "find_duplicate_budgets",
]
