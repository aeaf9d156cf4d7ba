"""List a user's categories."""

from __future__ import annotations

from rich.table import Table

from tally.model.entities import EntryType
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console


def run(*, workspace: Workspace, user_id: int) -> int:
    try:
        categories = LedgerStore(workspace).list_categories(user_id)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if not categories:
        console.print("[yellow]No categories defined.[/] Run 'tally init' to add the defaults.")
        return 0

    table = Table(title=f"Categories (user {user_id})", show_lines=False)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")

    for cat in sorted(categories, key=lambda c: (c.type != EntryType.expense, c.name.lower())):
        style = "red" if cat.type == EntryType.expense else "green"
        table.add_row(str(cat.id), cat.name, f"[{style}]{cat.type}[/]")

    console.print(table)
    return 0
