"""Implementation of 'moneyplan limits' command.

Shows per-category limits with their currency breakdown.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from moneyplan.cli.utils import format_currency, load_provider, resolve_period
from moneyplan.config import get_settings
from moneyplan.core.exceptions import BudgetNotFoundError
from moneyplan.core.money import format_percentage
from moneyplan.engine.limits import sort_currency_limits, summarize_currency_limit
from moneyplan.engine.periods import format_period

console = Console()


def limits_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Month to show as YYYY-MM (default: current month)",
    ),
    snapshot: Path = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Path to budget snapshot JSON",
    ),
    over_only: bool = typer.Option(
        False,
        "--over",
        help="Only show categories over budget",
    ),
) -> None:
    """Show category limits and over/under-budget state."""
    settings = get_settings()
    year, month = resolve_period(console, period)
    provider = load_provider(console, snapshot)

    try:
        report = provider.get_report(year, month)
    except BudgetNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    currency = report.currency
    table = Table(title=f"Category limits {format_period(year, month)}")
    table.add_column("Category")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("%", justify="right")
    table.add_column("State")

    shown = 0
    for summary in report.categories:
        if over_only and not summary.is_over_budget:
            continue
        shown += 1

        if summary.is_over_budget:
            state = "[red]over[/red]"
        elif summary.is_under_budget:
            state = "[green]under[/green]"
        else:
            state = "[dim]-[/dim]"

        table.add_row(
            summary.category_id or "?",
            format_currency(summary.total_limit, currency),
            format_currency(summary.actual_amount, currency),
            format_currency(summary.remaining, currency),
            f"{summary.progress_percent}%",
            state,
        )

        for limit in sort_currency_limits(summary.active_currency_limits, currency):
            row = summarize_currency_limit(limit, settings.near_limit_threshold)
            if row.is_over_budget:
                row_state = "[red]over[/red]"
            elif row.is_near_limit:
                row_state = "[yellow]near[/yellow]"
            else:
                row_state = ""
            table.add_row(
                f"  [dim]{row.currency}[/dim]",
                format_currency(row.total_limit, row.currency),
                format_currency(row.actual_amount, row.currency),
                format_currency(row.remaining, row.currency),
                format_percentage(row.progress, 0),
                row_state,
            )

    if shown == 0:
        console.print("[yellow]No categories to show[/yellow]")
        raise typer.Exit(0)

    console.print(table)
