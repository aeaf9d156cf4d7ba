"""Record an income or expense transaction."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import ValidationError

from tally.model.entities import Transaction
from tally.services.category_rules import check_category_type
from tally.storage import LedgerStore, StoreError
from tally.workspace import Workspace

from .util import console, money


def run(
    *,
    amount: str,
    category_id: int,
    type: str,
    on: Optional[date] = None,
    description: str = "",
    workspace: Workspace,
    user_id: int,
    write: bool = False,
) -> int:
    """Add a transaction after validating it against the user's categories.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    store = LedgerStore(workspace)
    try:
        # id 0 is a placeholder; the store assigns the real id on write
        preview = Transaction(
            id=0,
            amount=amount,
            category_id=category_id,
            user_id=user_id,
            type=type.strip().lower(),
            date=on or date.today(),
            description=description,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/] invalid transaction: {e}")
        return 1

    try:
        error = check_category_type(preview, store.list_categories(user_id))
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1
    if error is not None:
        console.print(f"[red]Error:[/] {error.message}")
        return 1

    summary = f"{preview.type} of {money(preview.amount)} on {preview.date.isoformat()}"
    if not write:
        console.print(f"[dim]Dry-run:[/] would add {summary}")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    try:
        txn = store.add_transaction(
            user_id=user_id,
            amount=preview.amount,
            category_id=preview.category_id,
            type=preview.type,
            date=preview.date,
            description=preview.description,
        )
    except (StoreError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(f"[green]✓[/] Added transaction {txn.id}: {summary}")
    return 0
