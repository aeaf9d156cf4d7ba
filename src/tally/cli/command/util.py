from __future__ import annotations

import logging
from decimal import Decimal

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from tally.config import CURRENCY_LABEL

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through Rich; WARNING by default, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def money(amount: Decimal) -> str:
    if amount < 0:
        return f"-{CURRENCY_LABEL}{abs(amount):,.2f}"
    return f"{CURRENCY_LABEL}{amount:,.2f}"


def fmt_amount(amount: Decimal) -> Text:
    s = money(amount)
    if amount < 0:
        return Text(s, style="bold red")
    elif amount > 0:
        return Text(s, style="bold green")
    return Text(s)
