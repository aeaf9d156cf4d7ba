from __future__ import annotations

"""
End-to-end tests for the Typer app.
"""

from pathlib import Path
from tempfile import TemporaryDirectory

from typer.testing import CliRunner

from tally.cli.app import app
from tally.storage import LedgerStore
from tally.workspace import Workspace

runner = CliRunner()


def _invoke(tmpdir: str, *args: str):
    return runner.invoke(app, ["--data-dir", tmpdir, *args])


class DescribeTallyApp:
    def it_should_initialize_workspace_with_default_categories(self):
        with TemporaryDirectory() as tmpdir:
            result = _invoke(tmpdir, "init")

            assert result.exit_code == 0
            store = LedgerStore(Workspace(root=Path(tmpdir)))
            assert len(store.list_categories(1)) == 15
            assert Workspace(root=Path(tmpdir)).budgets_config.exists()

    def it_should_not_write_without_write_flag(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")

            result = _invoke(tmpdir, "add", "--amount", "12.50", "--category-id", "1", "--date", "2024-06-03")

            assert result.exit_code == 0
            assert "Dry-run" in result.output
            assert LedgerStore(Workspace(root=Path(tmpdir))).list_transactions(1) == []

    def it_should_record_transactions_and_budgets(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")

            r1 = _invoke(tmpdir, "add", "-m", "500", "-c", "1", "-d", "2024-06-03", "--write")
            r2 = _invoke(tmpdir, "add", "-m", "400", "-c", "1", "-d", "2024-06-04", "--write")
            r3 = _invoke(tmpdir, "budget-set", "-c", "1", "-m", "1000", "--month", "6", "--year", "2024", "--write")

            assert (r1.exit_code, r2.exit_code, r3.exit_code) == (0, 0, 0)
            store = LedgerStore(Workspace(root=Path(tmpdir)))
            assert len(store.list_transactions(1)) == 2
            assert len(store.list_budgets(1)) == 1

            status = _invoke(tmpdir, "status", "--month", "6", "--year", "2024")
            assert status.exit_code == 0
            assert "Food & Dining has used 90% of its budget" in status.output

    def it_should_reject_transaction_with_mismatched_category_type(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")

            # id 11 is the first income category (Salary)
            result = _invoke(tmpdir, "add", "-m", "10", "-c", "11", "-t", "expense", "--write")

            assert result.exit_code == 1
            assert LedgerStore(Workspace(root=Path(tmpdir))).list_transactions(1) == []

    def it_should_reject_duplicate_budget(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")
            _invoke(tmpdir, "budget-set", "-c", "2", "-m", "100", "--month", "6", "--year", "2024", "--write")

            result = _invoke(tmpdir, "budget-set", "-c", "2", "-m", "200", "--month", "6", "--year", "2024", "--write")

            assert result.exit_code == 1
            assert "already exists" in result.output

    def it_should_edit_and_delete_transactions(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")
            _invoke(tmpdir, "add", "-m", "10", "-c", "1", "-d", "2024-06-03", "--write")

            edited = _invoke(tmpdir, "edit", "1", "--amount", "15.25", "--write")
            store = LedgerStore(Workspace(root=Path(tmpdir)))
            assert edited.exit_code == 0
            assert str(store.list_transactions(1)[0].amount) == "15.25"

            deleted = _invoke(tmpdir, "delete", "1", "--write")
            assert deleted.exit_code == 0
            assert store.list_transactions(1) == []

    def it_should_show_weekly_trend_with_seven_days(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")
            _invoke(tmpdir, "add", "-m", "10", "-c", "1", "-d", "2024-06-02", "--write")

            result = _invoke(tmpdir, "trend", "--weekly", "--date", "2024-06-05")

            assert result.exit_code == 0
            for day in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
                assert day in result.output

    def it_should_list_categories_and_distribution(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")
            _invoke(tmpdir, "add", "-m", "10", "-c", "2", "-d", "2024-06-02", "--write")

            cats = _invoke(tmpdir, "categories")
            dist = _invoke(tmpdir, "distribution")

            assert cats.exit_code == 0
            assert "Salary" in cats.output
            assert dist.exit_code == 0
            assert "Transportation" in dist.output
            assert "100.0%" in dist.output

    def it_should_add_custom_category_only_with_write(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")

            preview = _invoke(tmpdir, "category-add", "Pets", "--type", "expense")
            written = _invoke(tmpdir, "category-add", "Pets", "--type", "expense", "--write")

            names = [c.name for c in LedgerStore(Workspace(root=Path(tmpdir))).list_categories(1)]
            assert preview.exit_code == 0
            assert written.exit_code == 0
            assert names.count("Pets") == 1

    def it_should_limit_transaction_listing(self):
        with TemporaryDirectory() as tmpdir:
            _invoke(tmpdir, "init")
            for day in ("01", "02", "03"):
                _invoke(tmpdir, "add", "-m", "5", "-c", "1", "-d", f"2024-06-{day}", "--write")

            result = _invoke(tmpdir, "transactions", "--limit", "2")

            assert result.exit_code == 0
            assert "Showing 2 of 3 transactions" in result.output
