from __future__ import annotations

"""
Tally CLI Wrapper (Typer + Rich)

Local-only CLI for recording transactions, setting monthly budgets and
watching spending against them.

All paths are resolved from a single workspace root:
  --data-dir / TALLY_DATA env var / current working directory
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from tally.cli.command.util import configure_logging
from tally.config import DEFAULT_USER_ID, TREND_MONTHS
from tally.workspace import Workspace

HELP_WRITE = "Persist changes (default: dry-run)"
HELP_DATE = "Date as YYYY-MM-DD"
DATE_FORMATS = ["%Y-%m-%d"]

APP_HELP = "Tally personal finance tracker (local-only)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar="TALLY_DATA",
        help="Workspace root directory (default: current directory)",
    ),
    user: int = typer.Option(DEFAULT_USER_ID, "--user", "-u", envvar="TALLY_USER", help="User id owning the data"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Tally CLI: all paths resolved from a single workspace root."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)
    ctx.obj["user_id"] = user


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


def _user(ctx: typer.Context) -> int:
    return ctx.obj["user_id"]


@app.command()
def init(ctx: typer.Context):
    """Initialize a workspace and add the default categories for the user.

    Safe to run on an existing workspace; skips anything that already exists.

    Examples:
      tally --data-dir ~/finances init
      tally --user 2 init
    """
    from tally.cli.command import init as cmd_init

    raise typer.Exit(code=cmd_init.run(workspace=_ws(ctx), user_id=_user(ctx)))


@app.command()
def categories(ctx: typer.Context):
    """List the user's categories."""
    from tally.cli.command import categories as cmd_categories

    raise typer.Exit(code=cmd_categories.run(workspace=_ws(ctx), user_id=_user(ctx)))


@app.command("category-add")
def category_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name"),
    type: str = typer.Option("expense", "--type", "-t", help="income or expense"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Add a category.

    Examples:
      tally category-add "Pets" --type expense --write
    """
    from tally.cli.command import category as cmd_category

    code = cmd_category.run(name=name, type=type, workspace=_ws(ctx), user_id=_user(ctx), write=write)
    raise typer.Exit(code=code)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Option(..., "--amount", "-m", help="Amount (non-negative, e.g. 12.50)"),
    category_id: int = typer.Option(..., "--category-id", "-c", help="Category id (see 'tally categories')"),
    type: str = typer.Option("expense", "--type", "-t", help="income or expense"),
    on: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help=HELP_DATE + " (default: today)"),
    description: str = typer.Option("", "--description", help="Free-form description"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Record a transaction.

    Examples:
      tally add --amount 12.50 --category-id 1 --description "Lunch" --write
      tally add -m 3000 -c 11 -t income -d 2024-06-01 --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from tally.cli.command import add as cmd_add

    code = cmd_add.run(
        amount=amount,
        category_id=category_id,
        type=type,
        on=on.date() if on else None,
        description=description,
        workspace=_ws(ctx),
        user_id=_user(ctx),
        write=write,
    )
    raise typer.Exit(code=code)


@app.command()
def edit(
    ctx: typer.Context,
    transaction_id: int = typer.Argument(..., help="Transaction id"),
    amount: Optional[str] = typer.Option(None, "--amount", "-m", help="New amount"),
    category_id: Optional[int] = typer.Option(None, "--category-id", "-c", help="New category id"),
    type: Optional[str] = typer.Option(None, "--type", "-t", help="income or expense"),
    on: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help=HELP_DATE),
    description: Optional[str] = typer.Option(None, "--description", help="New description"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Change fields of a transaction. Unset options keep their value."""
    from tally.cli.command import edit as cmd_edit

    code = cmd_edit.run(
        transaction_id=transaction_id,
        amount=amount,
        category_id=category_id,
        type=type,
        on=on.date() if on else None,
        description=description,
        workspace=_ws(ctx),
        user_id=_user(ctx),
        write=write,
    )
    raise typer.Exit(code=code)


@app.command()
def delete(
    ctx: typer.Context,
    transaction_id: int = typer.Argument(..., help="Transaction id"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Delete a transaction."""
    from tally.cli.command import edit as cmd_edit

    code = cmd_edit.run_delete(transaction_id=transaction_id, workspace=_ws(ctx), user_id=_user(ctx), write=write)
    raise typer.Exit(code=code)


@app.command()
def transactions(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Max number of rows to show"),
):
    """List transactions, newest first."""
    from tally.cli.command import transactions as cmd_transactions

    raise typer.Exit(code=cmd_transactions.run(workspace=_ws(ctx), user_id=_user(ctx), limit=limit))


@app.command("budget-set")
def budget_set(
    ctx: typer.Context,
    category_id: int = typer.Option(..., "--category-id", "-c", help="Expense category id"),
    amount: str = typer.Option(..., "--amount", "-m", help="Budget amount (positive)"),
    month: Optional[int] = typer.Option(None, "--month", help="Month 1-12 (default: current)"),
    year: Optional[int] = typer.Option(None, "--year", help="Year (default: current)"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Set a monthly budget for a category.

    Examples:
      tally budget-set --category-id 1 --amount 400 --write
      tally budget-set -c 1 -m 400 --month 7 --year 2024 --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from tally.cli.command import budget as cmd_budget

    code = cmd_budget.run(
        category_id=category_id,
        amount=amount,
        month=month,
        year=year,
        workspace=_ws(ctx),
        user_id=_user(ctx),
        write=write,
    )
    raise typer.Exit(code=code)


@app.command("budget-delete")
def budget_delete(
    ctx: typer.Context,
    budget_id: int = typer.Argument(..., help="Budget id"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Delete a budget."""
    from tally.cli.command import budget as cmd_budget

    code = cmd_budget.run_delete(budget_id=budget_id, workspace=_ws(ctx), user_id=_user(ctx), write=write)
    raise typer.Exit(code=code)


@app.command()
def status(
    ctx: typer.Context,
    month: Optional[int] = typer.Option(None, "--month", help="Month 1-12 (default: current)"),
    year: Optional[int] = typer.Option(None, "--year", help="Year (default: current)"),
):
    """Show budget progress and alerts for a month.

    Examples:
      tally status
      tally status --month 6 --year 2024
    """
    from tally.cli.command import status as cmd_status

    raise typer.Exit(code=cmd_status.run(month=month, year=year, workspace=_ws(ctx), user_id=_user(ctx)))


@app.command()
def trend(
    ctx: typer.Context,
    weekly: bool = typer.Option(False, "--weekly", help="Show the days of one week instead of months"),
    months: int = typer.Option(TREND_MONTHS, "--months", min=1, help="Number of months to show"),
    on: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help=HELP_DATE + " inside the week (default: today)"),
):
    """Show income, expenses and savings over time.

    Examples:
      tally trend
      tally trend --weekly --date 2024-06-05
    """
    from tally.cli.command import trend as cmd_trend

    code = cmd_trend.run(
        weekly=weekly,
        months=months,
        reference=on.date() if on else None,
        workspace=_ws(ctx),
        user_id=_user(ctx),
    )
    raise typer.Exit(code=code)


@app.command()
def distribution(ctx: typer.Context):
    """Show how expenses split across categories."""
    from tally.cli.command import distribution as cmd_distribution

    raise typer.Exit(code=cmd_distribution.run(workspace=_ws(ctx), user_id=_user(ctx)))


if __name__ == "__main__":
    app()
