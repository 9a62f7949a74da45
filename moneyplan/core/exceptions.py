"""Exceptions raised at the moneyplan I/O boundary.

The calculators themselves never raise; these cover loading snapshots,
looking up budgets and validating status transitions.
"""


class MoneyplanError(Exception):
    """Base class for all moneyplan errors."""


class SnapshotNotFoundError(MoneyplanError):
    """Snapshot file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Snapshot not found: {path}")


class InvalidSnapshotError(MoneyplanError):
    """Snapshot file exists but cannot be parsed or validated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid snapshot {path}: {reason}")


class BudgetNotFoundError(MoneyplanError):
    """No budget exists for the requested month."""

    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        super().__init__(f"No budget for {year}-{month:02d}")


class InvalidTransitionError(MoneyplanError):
    """Planned item status change is not allowed."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change status from '{current}' to '{target}'")
