"""moneyplan command line entry point."""

import typer

from moneyplan.cli.limits import limits_command
from moneyplan.cli.overdue import overdue_command
from moneyplan.cli.stats import stats_command
from moneyplan.config import get_settings
from moneyplan.logging_config import configure_logging

app = typer.Typer(help="Monthly budget reconciliation", no_args_is_help=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging("DEBUG" if verbose else get_settings().log_level)


app.command(name="stats")(stats_command)
app.command(name="limits")(limits_command)
app.command(name="overdue")(overdue_command)


if __name__ == "__main__":
    app()
