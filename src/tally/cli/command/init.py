"""Initialize a new tally workspace directory."""

from __future__ import annotations

from tally.storage import LedgerStore
from tally.workspace import Workspace

from .util import console

_STARTER_BUDGETS_YML = """\
# Monthly budgets
# Use 'tally budget-set' to manage them, or edit this file directly.
# At most one budget per category and month.
#
# Example:
#   budgets:
#     - id: 1
#       amount: '400.00'
#       category_id: 1
#       user_id: 1
#       month: 6
#       year: 2024

budgets: []
"""


def run(*, workspace: Workspace, user_id: int) -> int:
    """Create the workspace layout and the user's starter categories.

    Safe to run on an existing workspace: existing files are left alone and
    categories are only seeded for a user that has none.

    Args:
        workspace: Workspace to initialize
        user_id: User to seed default categories for

    Returns:
        Exit code (0 = success)
    """
    console.print(f"[bold cyan]Initializing workspace:[/] {workspace.root}\n")

    for directory in (workspace.data_dir, workspace.config_dir):
        if directory.exists():
            console.print(f"  [dim]exists[/]  {directory}")
        else:
            directory.mkdir(parents=True)
            console.print(f"  [green]created[/] {directory}")

    if not workspace.budgets_config.exists():
        workspace.budgets_config.write_text(_STARTER_BUDGETS_YML, encoding="utf-8")
        console.print(f"  [green]created[/] {workspace.budgets_config}")

    store = LedgerStore(workspace)
    try:
        created = store.seed_default_categories(user_id)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if created:
        console.print(f"\n[green]Added {len(created)} default categories for user {user_id}[/]")
    else:
        console.print(f"\n[dim]User {user_id} already has categories[/]")
    return 0
