"""Edit or delete an existing transaction."""

from __future__ import annotations

from datetime import date
from typing import Optional

from tally.storage import LedgerStore, StoreError
from tally.workspace import Workspace

from .util import console, money


def run(
    *,
    transaction_id: int,
    amount: Optional[str] = None,
    category_id: Optional[int] = None,
    type: Optional[str] = None,
    on: Optional[date] = None,
    description: Optional[str] = None,
    workspace: Workspace,
    user_id: int,
    write: bool = False,
) -> int:
    """Replace the given fields of a transaction. Unset options keep their value."""
    changes = {
        "amount": amount,
        "category_id": category_id,
        "type": type.strip().lower() if type else None,
        "date": on,
        "description": description,
    }
    if all(v is None for v in changes.values()):
        console.print("[yellow]Nothing to change.[/] Pass at least one field option.")
        return 1

    store = LedgerStore(workspace)
    if not write:
        try:
            current = {t.id: t for t in store.list_transactions(user_id)}.get(transaction_id)
        except ValueError as e:
            console.print(f"[red]Error:[/] {e}")
            return 1
        if current is None:
            console.print(f"[red]Error:[/] Transaction {transaction_id} not found")
            return 1
        changed = ", ".join(f"{k}={v}" for k, v in changes.items() if v is not None)
        console.print(f"[dim]Dry-run:[/] would update transaction {transaction_id}: {changed}")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    try:
        txn = store.update_transaction(user_id, transaction_id, **changes)
    except (StoreError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(
        f"[green]✓[/] Updated transaction {txn.id}: {txn.type} of {money(txn.amount)} "
        f"on {txn.date.isoformat()}"
    )
    return 0


def run_delete(*, transaction_id: int, workspace: Workspace, user_id: int, write: bool = False) -> int:
    """Delete a transaction."""
    store = LedgerStore(workspace)
    if not write:
        try:
            known = {t.id for t in store.list_transactions(user_id)}
        except ValueError as e:
            console.print(f"[red]Error:[/] {e}")
            return 1
        if transaction_id not in known:
            console.print(f"[red]Error:[/] Transaction {transaction_id} not found")
            return 1
        console.print(f"[dim]Dry-run:[/] would delete transaction {transaction_id}")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    try:
        txn = store.delete_transaction(user_id, transaction_id)
    except (StoreError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(f"[green]✓[/] Deleted transaction {txn.id}")
    return 0
