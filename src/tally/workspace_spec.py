from __future__ import annotations

from pathlib import Path

from tally.workspace import Workspace


class DescribeWorkspace:
    class DescribeResolve:
        def it_should_use_explicit_path_when_provided(self):
            ws = Workspace.resolve(explicit=Path("/tmp/my-finances"))
            assert ws.root == Path("/tmp/my-finances")

        def it_should_use_tally_data_env_var_when_set(self, monkeypatch):
            monkeypatch.setenv("TALLY_DATA", "/tmp/env-finances")
            ws = Workspace.resolve()
            assert ws.root == Path("/tmp/env-finances")

        def it_should_prefer_explicit_over_env_var(self, monkeypatch):
            monkeypatch.setenv("TALLY_DATA", "/tmp/env-finances")
            ws = Workspace.resolve(explicit=Path("/tmp/explicit"))
            assert ws.root == Path("/tmp/explicit")

        def it_should_fall_back_to_cwd_when_no_env_var(self, monkeypatch):
            monkeypatch.delenv("TALLY_DATA", raising=False)
            ws = Workspace.resolve()
            assert ws.root == Path.cwd()

    class DescribePaths:
        def it_should_compute_transactions_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.transactions_path == Path("/data/data/transactions.csv")

        def it_should_compute_categories_config(self):
            ws = Workspace(root=Path("/data"))
            assert ws.categories_config == Path("/data/config/categories.yml")

        def it_should_compute_budgets_config(self):
            ws = Workspace(root=Path("/data"))
            assert ws.budgets_config == Path("/data/config/budgets.yml")
