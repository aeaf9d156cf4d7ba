"""
File-backed store for transactions, categories and budgets.

Layout under the workspace root:
- data/transactions.csv   (ledger, see tally.model.ledger_io)
- config/categories.yml   (see tally.model.config_io)
- config/budgets.yml

Reads never mutate anything. Every write loads the affected file, applies the
change and rewrites the whole file. Ids are assigned as max(existing) + 1.

Rules enforced on write:
- a transaction's category must exist and have the transaction's type
- at most one budget per (user, category, month, year)
- budgets may only target expense categories

Privacy: local files only, no network I/O.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from datetime import date

from tally.model.config_io import (
    BudgetConfig,
    CategoryConfig,
    load_budgets_config,
    load_categories_config,
    save_budgets_config,
    save_categories_config,
)
from tally.model.entities import Budget, Category, EntryType, Transaction, find_category
from tally.model.ledger_io import dump_ledger_csv, load_ledger_csv
from tally.services.category_rules import check_category_type, default_category_specs
from tally.workspace import Workspace

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for write rejections."""


class RecordNotFoundError(StoreError):
    """No record with the given id is owned by the user."""


class CategoryMismatchError(StoreError):
    """Transaction or budget points at a missing or wrongly typed category."""


class DuplicateBudgetError(StoreError):
    """A budget already exists for the same category and month."""


def _next_id(ids) -> int:
    return max(ids, default=0) + 1


class LedgerStore:
    """Storage collaborator backed by the workspace's CSV and YAML files.

    Usage:
        store = LedgerStore(Workspace.resolve())
        txns = store.list_transactions(user_id=1)
        budgets = store.list_budgets(user_id=1)
        categories = store.list_categories(user_id=1)
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    # ---- Loading / saving whole files ----

    def _load_all_transactions(self) -> list[Transaction]:
        path = self.workspace.transactions_path
        if not path.exists():
            return []
        return load_ledger_csv(path.read_text(encoding="utf-8"))

    def _save_all_transactions(self, transactions: list[Transaction]) -> None:
        path = self.workspace.transactions_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_ledger_csv(transactions), encoding="utf-8")

    def _load_all_categories(self) -> list[Category]:
        return load_categories_config(self.workspace.categories_config).categories

    def _load_all_budgets(self) -> list[Budget]:
        return load_budgets_config(self.workspace.budgets_config).budgets

    # ---- Read API ----

    def list_transactions(self, user_id: int) -> list[Transaction]:
        return [t for t in self._load_all_transactions() if t.user_id == user_id]

    def list_budgets(self, user_id: int) -> list[Budget]:
        return [b for b in self._load_all_budgets() if b.user_id == user_id]

    def list_categories(self, user_id: int) -> list[Category]:
        return [c for c in self._load_all_categories() if c.user_id == user_id]

    # ---- Categories ----

    def add_category(self, user_id: int, name: str, type: EntryType) -> Category:
        categories = self._load_all_categories()
        category = Category(
            id=_next_id(c.id for c in categories), name=name, user_id=user_id, type=type
        )
        categories.append(category)
        save_categories_config(self.workspace.categories_config, CategoryConfig(categories=categories))
        logger.info("Added %s category %d for user %d", type, category.id, user_id)
        return category

    def seed_default_categories(self, user_id: int) -> list[Category]:
        """Create the starter categories unless the user already has some."""
        categories = self._load_all_categories()
        if any(c.user_id == user_id for c in categories):
            logger.debug("User %d already has categories; not seeding", user_id)
            return []

        created = []
        next_id = _next_id(c.id for c in categories)
        for name, type_ in default_category_specs():
            created.append(Category(id=next_id, name=name, user_id=user_id, type=type_))
            next_id += 1

        save_categories_config(
            self.workspace.categories_config, CategoryConfig(categories=categories + created)
        )
        logger.info("Seeded %d default categories for user %d", len(created), user_id)
        return created

    # ---- Transactions ----

    def _validated(self, txn: Transaction) -> Transaction:
        error = check_category_type(txn, self.list_categories(txn.user_id))
        if error is not None:
            raise CategoryMismatchError(error.message)
        return txn

    def add_transaction(
        self,
        *,
        user_id: int,
        amount: Decimal | str,
        category_id: int,
        type: EntryType,
        date: date,
        description: str = "",
    ) -> Transaction:
        transactions = self._load_all_transactions()
        txn = self._validated(
            Transaction(
                id=_next_id(t.id for t in transactions),
                amount=amount,
                category_id=category_id,
                user_id=user_id,
                type=type,
                date=date,
                description=description,
            )
        )
        transactions.append(txn)
        self._save_all_transactions(transactions)
        logger.info("Added transaction %d for user %d", txn.id, user_id)
        return txn

    def update_transaction(self, user_id: int, transaction_id: int, **changes) -> Transaction:
        """Replace fields of an existing transaction; returns the new record."""
        transactions = self._load_all_transactions()
        for i, existing in enumerate(transactions):
            if existing.id == transaction_id and existing.user_id == user_id:
                data = existing.model_dump()
                data.update({k: v for k, v in changes.items() if v is not None})
                data["id"] = existing.id
                data["user_id"] = existing.user_id
                updated = self._validated(Transaction.model_validate(data))
                transactions[i] = updated
                self._save_all_transactions(transactions)
                logger.info("Updated transaction %d for user %d", transaction_id, user_id)
                return updated
        raise RecordNotFoundError(f"Transaction {transaction_id} not found")

    def delete_transaction(self, user_id: int, transaction_id: int) -> Transaction:
        transactions = self._load_all_transactions()
        for existing in transactions:
            if existing.id == transaction_id and existing.user_id == user_id:
                transactions.remove(existing)
                self._save_all_transactions(transactions)
                logger.info("Deleted transaction %d for user %d", transaction_id, user_id)
                return existing
        raise RecordNotFoundError(f"Transaction {transaction_id} not found")

    # ---- Budgets ----

    def add_budget(
        self,
        *,
        user_id: int,
        category_id: int,
        amount: Decimal | str,
        month: int,
        year: int,
    ) -> Budget:
        budgets = self._load_all_budgets()
        budget = Budget(
            id=_next_id(b.id for b in budgets),
            amount=amount,
            category_id=category_id,
            user_id=user_id,
            month=month,
            year=year,
        )

        category = find_category(self.list_categories(user_id), category_id)
        if category is None:
            raise CategoryMismatchError(f"Category {category_id} does not exist")
        if category.type != EntryType.expense:
            raise CategoryMismatchError(f"Category '{category.name}' is an income category")

        for b in budgets:
            if (b.user_id, b.category_id, b.year, b.month) == (user_id, category_id, year, month):
                raise DuplicateBudgetError(
                    f"Budget {b.id} already covers '{category.name}' for {year}-{month:02d}"
                )

        budgets.append(budget)
        save_budgets_config(self.workspace.budgets_config, BudgetConfig(budgets=budgets))
        logger.info("Added budget %d for user %d", budget.id, user_id)
        return budget

    def delete_budget(self, user_id: int, budget_id: int) -> Budget:
        budgets = self._load_all_budgets()
        for existing in budgets:
            if existing.id == budget_id and existing.user_id == user_id:
                budgets.remove(existing)
                save_budgets_config(self.workspace.budgets_config, BudgetConfig(budgets=budgets))
                logger.info("Deleted budget %d for user %d", budget_id, user_id)
                return existing
        raise RecordNotFoundError(f"Budget {budget_id} not found")


__all__ = [
    "CategoryMismatchError",
    "DuplicateBudgetError",
    "LedgerStore",
    "RecordNotFoundError",
    "StoreError",
]
