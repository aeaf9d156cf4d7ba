"""
Central configuration for Tally.

Path resolution lives in tally.workspace.Workspace, which computes every data
location from a single workspace root:
  1. Explicit --data-dir CLI option
  2. TALLY_DATA environment variable
  3. Current working directory

Thresholds below are shared by the budget evaluator and the CLI.
"""

from decimal import Decimal

# Share of a budget at which a category is reported as near its limit.
NEAR_LIMIT_RATIO = Decimal("0.9")

# Number of month buckets shown in the monthly trend.
TREND_MONTHS = 6

# Label prefixed to amounts in console output.
CURRENCY_LABEL = "$"

DEFAULT_USER_ID = 1
