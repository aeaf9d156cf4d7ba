from __future__ import annotations

"""
Budget status: compare this month's spending with budgets and show alerts.
"""

from typing import Optional

from rich.table import Table

from tally.model.alerts import AlertEvent, AlertSeverity
from tally.model.entities import find_category
from tally.model.errors import InvalidPeriodError
from tally.services.budget_evaluator import BudgetState, BudgetStatus
from tally.services.budget_service import BudgetReport, BudgetService
from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console, fmt_amount, money

_BAR_WIDTH = 20


def run(
    *,
    month: Optional[int] = None,
    year: Optional[int] = None,
    workspace: Workspace,
    user_id: int,
) -> int:
    """Display budget statuses and alerts for a month.

    Args:
        month: Reference month (default: current month)
        year: Reference year (default: current year)
        workspace: Workspace providing data paths
        user_id: Owner of the data

    Returns:
        Exit code (0 = success, 1 = error)
    """
    if month is not None and (month < 1 or month > 12):
        console.print("[red]Error:[/] --month must be between 1 and 12")
        return 1

    store = LedgerStore(workspace)
    try:
        report = BudgetService(store).get_report(user_id, month=month, year=year)
        categories = store.list_categories(user_id)
    except (InvalidPeriodError, ValueError) as e:
        console.print(f"[red]Error:[/] Failed to generate budget status: {e}")
        return 1

    _display_totals(report)
    _display_statuses(report, {c.id: c.name for c in categories})
    _display_alerts(report.alerts)

    for group in report.duplicate_budgets:
        ids = ", ".join(str(b.id) for b in group)
        name = find_category(categories, group[0].category_id)
        label = name.name if name else f"category {group[0].category_id}"
        console.print(f"[yellow]⚠ Budgets {ids} overlap for {label}; each is evaluated separately[/]")

    return 0


def _display_totals(report: BudgetReport) -> None:
    console.print("[bold]Total Income:[/] ", fmt_amount(report.total_income))
    console.print(f"[bold]Total Expenses:[/] [bold red]{money(report.total_expense)}[/]")
    console.print("[bold]Balance:[/] ", fmt_amount(report.balance))
    console.print(
        f"[dim]{report.year}-{report.month:02d}: income {money(report.month_income)}, "
        f"expenses {money(report.month_expense)}[/]\n"
    )


def _progress_bar(status: BudgetStatus) -> str:
    filled = int(status.progress_percent * _BAR_WIDTH / 100)
    color = {
        BudgetState.under: "green",
        BudgetState.near: "yellow",
        BudgetState.over: "red",
    }.get(status.state, "dim")
    return f"[{color}]{'█' * filled}[/][dim]{'░' * (_BAR_WIDTH - filled)}[/]"


def _display_statuses(report: BudgetReport, names: dict[int, str]) -> None:
    if not report.statuses:
        console.print("[dim]No budgets set for this month[/]\n")
        return

    table = Table(title=f"Budgets {report.year}-{report.month:02d}", show_lines=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Spent", justify="right")
    table.add_column("Budget", style="green", justify="right")
    table.add_column("Progress")
    table.add_column("% Used", justify="right")
    table.add_column("Note")

    for status in report.statuses:
        name = names.get(status.budget.category_id, f"#{status.budget.category_id}")
        if status.is_error:
            table.add_row(
                name,
                money(status.spent),
                money(status.budget.amount),
                _progress_bar(status),
                "—",
                f"[red]{status.error.message}[/]",
            )
            continue

        pct = status.percent_used
        if status.state == BudgetState.over:
            pct_str = f"[red bold]{pct:.1f}%[/]"
            note = f"[red]Budget exceeded by {money(status.exceeded_by)}[/]"
        elif status.state == BudgetState.near:
            pct_str = f"[yellow]{pct:.1f}%[/]"
            note = f"[yellow]{money(status.remaining)} left[/]"
        else:
            pct_str = f"[green]{pct:.1f}%[/]"
            note = f"{money(status.remaining)} left"

        table.add_row(
            name,
            money(status.spent),
            money(status.budget.amount),
            _progress_bar(status),
            pct_str,
            note,
        )

    console.print(table)

    if report.over_budget_count > 0:
        plural = "y" if report.over_budget_count == 1 else "ies"
        console.print(f"\n[yellow]⚠ {report.over_budget_count} categor{plural} over budget[/]")


def _display_alerts(alerts: list[AlertEvent]) -> None:
    if not alerts:
        return
    console.print("\n[bold]Alerts[/]")
    for alert in alerts:
        style = "red" if alert.severity == AlertSeverity.critical else "yellow"
        console.print(f"  [{style}]●[/] {alert.message()}")
