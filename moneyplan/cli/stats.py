"""Implementation of 'moneyplan stats' command.

Shows the headline availability figures of a monthly budget.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from moneyplan.cli.utils import format_currency, load_provider, resolve_period, signed_style
from moneyplan.core.exceptions import BudgetNotFoundError
from moneyplan.engine.periods import format_period

console = Console()


def stats_command(
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
        help="Path to budget snapshot JSON (default: MONEYPLAN_SNAPSHOT_PATH)",
    ),
) -> None:
    """Show budget statistics for a month.

    Displays what is still available for planning, what is actually
    available to spend, and the subtotals both are built from.
    """
    year, month = resolve_period(console, period)
    provider = load_provider(console, snapshot)

    try:
        report = provider.get_report(year, month)
    except BudgetNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    stats = report.stats
    currency = report.currency

    console.print()
    console.print(Panel(f"[bold]Budget for {format_period(year, month)}[/bold]", style="cyan"))
    console.print()

    style = signed_style(stats.available_for_planning)
    console.print(
        f"[bold]Available for planning:[/bold] "
        f"[{style}]{format_currency(stats.available_for_planning, currency):>16}[/{style}]"
    )
    style = signed_style(stats.actually_available)
    console.print(
        f"[bold]Actually available:[/bold]     "
        f"[{style}]{format_currency(stats.actually_available, currency):>16}[/{style}]"
    )
    console.print()

    console.print("[bold]Income[/bold]")
    console.print(f"  Expected:  {format_currency(stats.expected_income, currency):>16}")
    console.print(f"  Received:  {format_currency(stats.received_income, currency):>16}")
    console.print(f"  Pending:   {format_currency(stats.pending_income, currency):>16}")
    console.print()

    console.print("[bold]Categories[/bold]")
    console.print(f"  Planned:   {format_currency(stats.total_planned, currency):>16}")
    console.print(f"  Actual:    {format_currency(stats.total_actual, currency):>16}")
    if stats.is_over_budget:
        console.print(f"  [red]Over budget by {format_currency(-stats.variance, currency)}[/red]")
    else:
        console.print(f"  [green]Variance:  {format_currency(stats.variance, currency):>16}[/green]")
    console.print()

    console.print("[bold]Mandatory expenses[/bold]")
    console.print(f"  Total:     {format_currency(stats.total_planned_expenses, currency):>16}")
    console.print(f"  Pending:   {format_currency(stats.pending_planned, currency):>16}")
    console.print(f"  Confirmed: {format_currency(stats.confirmed_planned, currency):>16}")
    if stats.total_from_funds > 0:
        console.print(f"  [dim]From funds: {format_currency(stats.total_from_funds, currency)}[/dim]")
    console.print()

    if stats.expected_fund_distributions or stats.actual_fund_distributions:
        console.print("[bold]Fund distributions[/bold]")
        console.print(f"  Expected:  {format_currency(stats.expected_fund_distributions, currency):>16}")
        console.print(f"  Actual:    {format_currency(stats.actual_fund_distributions, currency):>16}")
        console.print()

    for fund in report.fund_financing:
        console.print(
            f"[dim]Fund {fund.name}: planned {format_currency(fund.planned_amount, currency)}, "
            f"used {format_currency(fund.used_amount, currency)}[/dim]"
        )
