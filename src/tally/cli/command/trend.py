"""Monthly or weekly income/expense trend."""

from __future__ import annotations

from datetime import date
from typing import Optional

from rich.table import Table

from tally.config import TREND_MONTHS
from tally.services.bucketing import week_bounds
from tally.services.budget_service import BudgetService
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console, fmt_amount, money


def run(
    *,
    weekly: bool = False,
    months: int = TREND_MONTHS,
    reference: Optional[date] = None,
    workspace: Workspace,
    user_id: int,
) -> int:
    """Print the monthly trend (last N months) or the week containing reference.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    service = BudgetService(LedgerStore(workspace))
    try:
        if weekly:
            _display_week(service, user_id, reference or date.today())
        else:
            _display_months(service, user_id, months)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1
    return 0


def _display_months(service: BudgetService, user_id: int, months: int) -> None:
    trend = service.get_trend(user_id, months=months)
    if not trend:
        console.print("[dim]No transactions found[/]")
        return

    table = Table(title=f"Monthly trend (last {months} months)")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("Savings", justify="right")

    for key, totals in trend:
        table.add_row(key.label, money(totals.income), money(totals.expense), fmt_amount(totals.savings))

    console.print(table)


def _display_week(service: BudgetService, user_id: int, reference: date) -> None:
    start, end = week_bounds(reference)
    table = Table(title=f"Week of {start.isoformat()} to {end.isoformat()}")
    table.add_column("Day", style="cyan")
    table.add_column("Date", style="dim")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")

    for bucket, totals in service.get_week(user_id, reference):
        table.add_row(bucket.label, bucket.day.isoformat(), money(totals.income), money(totals.expense))

    console.print(table)
