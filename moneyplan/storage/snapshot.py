"""Budget data sources.

The engine never talks to the budget API directly. It reads collections
through the BudgetDataSource protocol; SnapshotDataSource serves them from a
JSON export of the API responses.

Snapshot layout::

    {
      "budgets": [{"id": "...", "year": 2024, "month": 3, "items": [...],
                   "distributionSummary": {...}}],
      "plannedExpenses": [...],
      "plannedIncomes": [...],
      "expenses": [...],
      "funds": [...]
    }
"""

import logging
from datetime import date
from pathlib import Path
from typing import Protocol

from pydantic import Field, ValidationError

from moneyplan.core.exceptions import (
    BudgetNotFoundError,
    InvalidSnapshotError,
    SnapshotNotFoundError,
)
from moneyplan.core.models import (
    ApiModel,
    Budget,
    BudgetItem,
    Expense,
    FundBalance,
    PlannedExpense,
    PlannedExpenseStatus,
    PlannedIncome,
    PlannedIncomeStatus,
)

logger = logging.getLogger(__name__)


class BudgetDataSource(Protocol):
    """Collections the engine consumes from the budget API."""

    def get_budget(self, year: int, month: int) -> Budget: ...

    def list_budget_items(self, budget_id: str) -> list[BudgetItem]: ...

    def list_planned_expenses(
        self, budget_id: str, status: PlannedExpenseStatus | None = None
    ) -> list[PlannedExpense]: ...

    def list_planned_incomes(
        self, budget_id: str, status: PlannedIncomeStatus | None = None
    ) -> list[PlannedIncome]: ...

    def list_expenses(self, date_from: date, date_to: date) -> list[Expense]: ...

    def list_fund_balances(self) -> list[FundBalance]: ...


class Snapshot(ApiModel):
    """A JSON export of budget API responses."""

    budgets: list[Budget] = Field(default_factory=list)
    planned_expenses: list[PlannedExpense] = Field(default_factory=list)
    planned_incomes: list[PlannedIncome] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    funds: list[FundBalance] = Field(default_factory=list)


class SnapshotDataSource:
    """BudgetDataSource backed by an in-memory Snapshot."""

    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot

    @classmethod
    def from_file(cls, path: Path) -> "SnapshotDataSource":
        """Load a snapshot from a JSON file.

        Raises:
            SnapshotNotFoundError: If the file does not exist.
            InvalidSnapshotError: If the file is not a valid snapshot.
        """
        if not path.exists():
            raise SnapshotNotFoundError(str(path))
        try:
            snapshot = Snapshot.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise InvalidSnapshotError(str(path), f"{e.error_count()} validation error(s)") from e
        logger.debug(
            "Loaded snapshot %s: %d budgets, %d expenses",
            path,
            len(snapshot.budgets),
            len(snapshot.expenses),
        )
        return cls(snapshot)

    def get_budget(self, year: int, month: int) -> Budget:
        for budget in self.snapshot.budgets:
            if budget.year == year and budget.month == month:
                return budget
        raise BudgetNotFoundError(year, month)

    def list_budget_items(self, budget_id: str) -> list[BudgetItem]:
        for budget in self.snapshot.budgets:
            if budget.id == budget_id:
                return list(budget.items)
        return []

    def list_planned_expenses(
        self, budget_id: str, status: PlannedExpenseStatus | None = None
    ) -> list[PlannedExpense]:
        return [
            e
            for e in self.snapshot.planned_expenses
            if (e.budget_id is None or e.budget_id == budget_id)
            and (status is None or e.status == status)
        ]

    def list_planned_incomes(
        self, budget_id: str, status: PlannedIncomeStatus | None = None
    ) -> list[PlannedIncome]:
        return [
            i
            for i in self.snapshot.planned_incomes
            if (i.budget_id is None or i.budget_id == budget_id)
            and (status is None or i.status == status)
        ]

    def list_expenses(self, date_from: date, date_to: date) -> list[Expense]:
        """Expenses in [date_from, date_to). Undated expenses are always included."""
        return [
            e
            for e in self.snapshot.expenses
            if e.spent_on is None or date_from <= e.spent_on < date_to
        ]

    def list_fund_balances(self) -> list[FundBalance]:
        return list(self.snapshot.funds)
