"""Set or delete monthly category budgets."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import ValidationError

from tally.model.entities import Budget, EntryType, find_category
from tally.storage import LedgerStore, StoreError
from tally.workspace import Workspace

from .util import console, money


def run(
    *,
    category_id: int,
    amount: str,
    month: Optional[int] = None,
    year: Optional[int] = None,
    workspace: Workspace,
    user_id: int,
    write: bool = False,
) -> int:
    """Create a budget for one category and month (default: current month).

    Returns:
        Exit code (0 = success, 1 = error)
    """
    today = date.today()
    month = today.month if month is None else month
    year = today.year if year is None else year

    store = LedgerStore(workspace)
    try:
        # id 0 is a placeholder; the store assigns the real id on write
        preview = Budget(
            id=0, amount=amount, category_id=category_id, user_id=user_id, month=month, year=year
        )
        categories = store.list_categories(user_id)
        budgets = store.list_budgets(user_id)
    except ValidationError as e:
        console.print(f"[red]Error:[/] invalid budget: {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    category = find_category(categories, category_id)
    if category is None:
        console.print(f"[red]Error:[/] Category {category_id} does not exist")
        return 1
    if category.type != EntryType.expense:
        console.print(f"[red]Error:[/] '{category.name}' is an income category")
        return 1
    if any(b.category_id == category_id and b.period == preview.period for b in budgets):
        console.print(
            f"[red]Error:[/] a budget for '{category.name}' in {year}-{month:02d} already exists"
        )
        return 1

    summary = f"{money(preview.amount)} for '{category.name}' in {year}-{month:02d}"
    if not write:
        console.print(f"[dim]Dry-run:[/] would set budget {summary}")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    try:
        budget = store.add_budget(
            user_id=user_id, category_id=category_id, amount=preview.amount, month=month, year=year
        )
    except (StoreError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(f"[green]✓[/] Set budget {budget.id}: {summary}")
    return 0


def run_delete(*, budget_id: int, workspace: Workspace, user_id: int, write: bool = False) -> int:
    """Delete a budget."""
    store = LedgerStore(workspace)
    if not write:
        try:
            known = {b.id for b in store.list_budgets(user_id)}
        except ValueError as e:
            console.print(f"[red]Error:[/] {e}")
            return 1
        if budget_id not in known:
            console.print(f"[red]Error:[/] Budget {budget_id} not found")
            return 1
        console.print(f"[dim]Dry-run:[/] would delete budget {budget_id}")
        console.print("[dim]Use --write to persist changes[/]")
        return 0

    try:
        budget = store.delete_budget(user_id, budget_id)
    except (StoreError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    console.print(f"[green]✓[/] Deleted budget {budget.id}")
    return 0
