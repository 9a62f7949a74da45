"""Shared helpers for CLI commands."""

from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console

from moneyplan.config import get_settings
from moneyplan.core.exceptions import MoneyplanError
from moneyplan.core.money import format_money
from moneyplan.engine.periods import get_current_period, parse_period
from moneyplan.engine.provider import BudgetDataProvider
from moneyplan.storage.snapshot import SnapshotDataSource


def format_currency(amount: Decimal, currency: str) -> str:
    """Format an amount with its currency symbol."""
    return format_money(amount, currency)


def signed_style(amount: Decimal) -> str:
    """Rich style for a figure that is bad when negative."""
    return "red" if amount < 0 else "green"


def resolve_period(console: Console, period: str | None) -> tuple[int, int]:
    """Parse --period or fall back to the current month, exiting on error."""
    if not period:
        return get_current_period()
    try:
        return parse_period(period)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def load_provider(console: Console, snapshot: Path | None) -> BudgetDataProvider:
    """Build a provider over the snapshot file, exiting on error."""
    settings = get_settings()
    path = snapshot or settings.snapshot_path
    try:
        source = SnapshotDataSource.from_file(path)
    except MoneyplanError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return BudgetDataProvider(
        source,
        base_currency=settings.base_currency,
        hidden_categories=settings.hidden_categories,
    )
