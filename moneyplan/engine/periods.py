"""Monthly period helpers.

Budgets are monthly. Periods are half-open: [start, end).
"""

from datetime import date


def get_period_start(year: int, month: int) -> date:
    """First day of the month."""
    return date(year, month, 1)


def get_period_end(year: int, month: int) -> date:
    """First day of the following month (exclusive end)."""
    if month == 12:
        return date(year + 1, 1, 1)
    return date(year, month + 1, 1)


def parse_period(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` string into (year, month).

    Raises:
        ValueError: If the string is not a valid month.
    """
    try:
        year_str, month_str = value.strip().split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise ValueError(f"Invalid period '{value}', expected YYYY-MM") from None
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in period '{value}'")
    return year, month


def format_period(year: int, month: int) -> str:
    """Format (year, month) as ``YYYY-MM``."""
    return f"{year:04d}-{month:02d}"


def get_current_period(today: date | None = None) -> tuple[int, int]:
    """(year, month) of the current period."""
    today = today or date.today()
    return today.year, today.month
