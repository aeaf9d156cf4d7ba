"""Tally: local personal finance tracking with monthly budgets and alerts."""

__version__ = "0.1.0"
