from __future__ import annotations

"""
Transaction ledger CSV <-> model conversion (pure text, no disk I/O).

A single flat CSV holds every user's transactions, one row per Transaction.
Amounts are written exactly as their Decimal string so a load/dump cycle never
changes a value.

- Unknown columns are ignored.
- Blank lines are skipped.
- Rows that fail validation raise ValueError naming the offending row.
"""

import csv
import io
from collections.abc import Iterable

from pydantic import ValidationError

from .entities import Transaction

# Keep order stable for deterministic outputs.
LEDGER_COLUMNS: list[str] = [
    "id",
    "user_id",
    "date",
    "type",
    "category_id",
    "amount",
    "description",
]


def dump_ledger_csv(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions into a flat CSV string, ordered by id."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=LEDGER_COLUMNS, lineterminator="\n")
    writer.writeheader()

    for t in sorted(transactions, key=lambda t: t.id):
        writer.writerow(
            {
                "id": t.id,
                "user_id": t.user_id,
                "date": t.date.isoformat(),
                "type": t.type.value,
                "category_id": t.category_id,
                "amount": str(t.amount),
                "description": t.description,
            }
        )

    return output.getvalue()


def load_ledger_csv(text: str) -> list[Transaction]:
    """Parse a ledger CSV string into Transaction objects ordered by id."""
    reader = csv.DictReader(io.StringIO(text))
    result: list[Transaction] = []

    for line_no, r in enumerate(reader, start=2):
        if not any((v or "").strip() for v in r.values() if isinstance(v, str)):
            continue
        try:
            result.append(
                Transaction(
                    id=(r.get("id") or "").strip(),
                    user_id=(r.get("user_id") or "").strip(),
                    date=(r.get("date") or "").strip(),
                    type=(r.get("type") or "").strip().lower(),
                    category_id=(r.get("category_id") or "").strip(),
                    amount=(r.get("amount") or "").strip(),
                    description=(r.get("description") or "").strip(),
                )
            )
        except ValidationError as ve:
            raise ValueError(f"Invalid transaction on line {line_no}: {ve}") from ve

    result.sort(key=lambda t: t.id)
    return result


__all__ = [
    "LEDGER_COLUMNS",
    "dump_ledger_csv",
    "load_ledger_csv",
]
