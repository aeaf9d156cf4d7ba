from .alerts import (
    AlertEvent,
    AlertSeverity,
    BudgetExceeded,
    BudgetNearLimit,
    ExpensesExceedIncome,
)
from .entities import Budget, Category, EntryType, Transaction, find_category
from .errors import CoreError, ErrorKind, InvalidPeriodError
from .ledger_io import LEDGER_COLUMNS, dump_ledger_csv, load_ledger_csv

__all__ = [
    # entities
    "Budget",
    "Category",
    "EntryType",
    "Transaction",
    "find_category",
    # alerts
    "AlertEvent",
    "AlertSeverity",
    "BudgetExceeded",
    "BudgetNearLimit",
    "ExpensesExceedIncome",
    # errors
    "CoreError",
    "ErrorKind",
    "InvalidPeriodError",
    # IO helpers
    "dump_ledger_csv",
    "load_ledger_csv",
    "LEDGER_COLUMNS",
]
