"""Expense distribution by category."""

from __future__ import annotations

from rich.table import Table

from tally.services.budget_service import BudgetService
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console, money


def run(*, workspace: Workspace, user_id: int) -> int:
    try:
        slices = BudgetService(LedgerStore(workspace)).get_distribution(user_id)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if not slices:
        console.print("[dim]No expenses recorded[/]")
        return 0

    table = Table(title="Expenses by category")
    table.add_column("Category", style="cyan")
    table.add_column("Spent", justify="right")
    table.add_column("Share", justify="right", style="magenta")

    for s in slices:
        table.add_row(s.name, money(s.value), f"{s.share * 100:.1f}%")

    console.print(table)
    return 0
