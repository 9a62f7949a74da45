"""Implementation of 'moneyplan overdue' command."""

from pathlib import Path

import typer
from rich.console import Console

from moneyplan.cli.utils import format_currency, load_provider, resolve_period
from moneyplan.core.exceptions import BudgetNotFoundError

console = Console()


def overdue_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Month to check as YYYY-MM (default: current month)",
    ),
    snapshot: Path = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Path to budget snapshot JSON",
    ),
) -> None:
    """List pending planned payments whose date has passed."""
    year, month = resolve_period(console, period)
    provider = load_provider(console, snapshot)

    try:
        report = provider.get_report(year, month)
    except BudgetNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not report.overdue:
        console.print("[green]No overdue payments[/green]")
        raise typer.Exit(0)

    console.print(f"[bold yellow]⚠ {len(report.overdue)} overdue payment(s)[/bold yellow]")
    for payment in report.overdue:
        sign = "-" if payment.kind == "expense" else "+"
        console.print(
            f"  {payment.planned_date}  {payment.name}: "
            f"{sign}{format_currency(payment.amount, payment.currency)} "
            f"[dim]({payment.days_overdue} days)[/dim]"
        )
