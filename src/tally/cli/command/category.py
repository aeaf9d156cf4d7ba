"""Add a category."""

from __future__ import annotations

from tally.model.entities import EntryType
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console


def run(*, name: str, type: str, workspace: Workspace, user_id: int, write: bool = False) -> int:
    """Add a category for the user.

    Args:
        name: Category name
        type: 'income' or 'expense'
        workspace: Workspace providing config paths
        user_id: Owner of the category
        write: Persist the change (default: dry-run)

    Returns:
        Exit code (0 = success, 1 = error)
    """
    name = name.strip()
    try:
        entry_type = EntryType(type.strip().lower())
    except ValueError:
        console.print(f"[red]Error:[/] type must be 'income' or 'expense', got '{type}'")
        return 1
    if not name:
        console.print("[red]Error:[/] category name cannot be empty")
        return 1

    store = LedgerStore(workspace)
    try:
        existing = store.list_categories(user_id)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if any(c.name.lower() == name.lower() and c.type == entry_type for c in existing):
        console.print(f"[yellow]Category '{name}' ({entry_type}) already exists[/]")
        return 1

    if not write:
        console.print(f"[dim]Dry-run:[/] would add {entry_type} category '{name}'")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    category = store.add_category(user_id, name, entry_type)
    console.print(f"[green]✓[/] Added {entry_type} category '{category.name}' (id {category.id})")
    return 0
