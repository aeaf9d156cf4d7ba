from __future__ import annotations

"""
Category and budget configuration I/O (YAML loading and saving).

Functions for reading and writing config/categories.yml and config/budgets.yml.
Both files hold a single top-level list keyed by their record type:

    categories:
      - id: 1
        name: Food & Dining
        user_id: 1
        type: expense

    budgets:
      - id: 1
        amount: '400.00'
        category_id: 1
        user_id: 1
        month: 6
        year: 2024

Amounts are written as strings so YAML never turns them into floats.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from tally.model.entities import Budget, Category


class CategoryConfig(BaseModel):
    """Root document of categories.yml."""

    categories: list[Category] = Field(default_factory=list)


class BudgetConfig(BaseModel):
    """Root document of budgets.yml."""

    budgets: list[Budget] = Field(default_factory=list)


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def _save_yaml(path: Path, model: BaseModel) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # mode="json" turns enums and Decimals into plain strings for YAML
    data = model.model_dump(mode="json")
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def load_categories_config(path: Path) -> CategoryConfig:
    """Load categories.yml with the safe loader.

    A missing file yields an empty config. Invalid content raises ValueError.
    """
    try:
        return CategoryConfig.model_validate(_load_yaml(path))
    except (ValidationError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid categories config {path}: {e}") from e


def save_categories_config(path: Path, config: CategoryConfig) -> None:
    """Write categories.yml, creating parent directories if needed."""
    _save_yaml(path, config)


def load_budgets_config(path: Path) -> BudgetConfig:
    """Load budgets.yml with the safe loader.

    A missing file yields an empty config. Invalid content raises ValueError.
    """
    try:
        return BudgetConfig.model_validate(_load_yaml(path))
    except (ValidationError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid budgets config {path}: {e}") from e


def save_budgets_config(path: Path, config: BudgetConfig) -> None:
    """Write budgets.yml, creating parent directories if needed."""
    _save_yaml(path, config)


__all__ = [
    "BudgetConfig",
    "CategoryConfig",
    "load_budgets_config",
    "load_categories_config",
    "save_budgets_config",
    "save_categories_config",
]
