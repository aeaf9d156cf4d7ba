from .ledger_store import (
    CategoryMismatchError,
    DuplicateBudgetError,
    LedgerStore,
    RecordNotFoundError,
    StoreError,
)

__all__ = [
    "CategoryMismatchError",
    "DuplicateBudgetError",
    "LedgerStore",
    "RecordNotFoundError",
    "StoreError",
]
