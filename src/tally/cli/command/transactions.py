"""List a user's transactions, newest first."""

from __future__ import annotations

from typing import Optional

from rich.table import Table

from tally.model.entities import find_category
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console, money


def run(*, workspace: Workspace, user_id: int, limit: Optional[int] = None) -> int:
    store = LedgerStore(workspace)
    try:
        transactions = store.list_transactions(user_id)
        categories = store.list_categories(user_id)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if not transactions:
        console.print("[dim]No transactions found[/]")
        return 0

    rows = sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)
    if limit is not None:
        rows = rows[:limit]

    table = Table(title=f"Transactions (user {user_id})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Category", style="cyan")
    table.add_column("Type")
    table.add_column("Amount", justify="right")

    for t in rows:
        cat = find_category(categories, t.category_id)
        style = "green" if t.is_income else "red"
        table.add_row(
            str(t.id),
            f"{t.date:%b} {t.date.day}, {t.date.year}",
            t.description,
            cat.name if cat else "Unknown",
            f"[{style}]{t.type}[/]",
            f"[{style}]{money(t.amount)}[/]",
        )

    console.print(table)
    if limit is not None and len(transactions) > limit:
        console.print(f"[dim]Showing {limit} of {len(transactions)} transactions[/]")
    return 0
