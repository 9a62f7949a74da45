"""Budget report provider.

Collects a month's collections from a data source and runs the engine over
them to build everything the budget page shows.
"""

import logging
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from moneyplan.core.models import (
    Budget,
    BudgetItem,
    BudgetReport,
    CategoryLimitSummary,
    Expense,
    FundBalance,
    PlannedExpense,
    PlannedIncome,
)
from moneyplan.engine.calculator import (
    calculate_budget_stats,
    calculate_fund_financing,
    group_actual_by_category,
)
from moneyplan.engine.grouping import (
    find_overdue_payments,
    total_base_amount,
    totals_by_currency,
)
from moneyplan.engine.limits import summarize_category_limits
from moneyplan.engine.memo import IdentityMemo
from moneyplan.engine.periods import get_period_end, get_period_start
from moneyplan.storage.snapshot import BudgetDataSource

logger = logging.getLogger(__name__)


class MonthData(BaseModel):
    """Collections fetched for one month."""

    budget: Budget
    items: list[BudgetItem]
    planned_expenses: list[PlannedExpense]
    planned_incomes: list[PlannedIncome]
    expenses: list[Expense]
    funds: list[FundBalance]
    actual_by_category: dict[str, Decimal] = Field(default_factory=dict)


class BudgetDataProvider:
    """Provides budget reports for a data source.

    Fetched collections are kept per month until invalidate() is called,
    so repeated reports reuse the same references and the memoized
    calculations are not rerun.
    """

    def __init__(
        self,
        source: BudgetDataSource,
        base_currency: str = "RUB",
        hidden_categories: set[str] | None = None,
    ):
        """Initialize data provider.

        Args:
            source: Where budget collections come from.
            base_currency: Currency of headline figures.
            hidden_categories: Category ids left out of category rows.
                Display preference only; stats are unaffected.
        """
        self.source = source
        self.base_currency = base_currency
        self.hidden_categories = hidden_categories or set()
        self._months: dict[tuple[int, int], MonthData] = {}
        self._stats = IdentityMemo(calculate_budget_stats)
        self._fund_financing = IdentityMemo(calculate_fund_financing)

    def invalidate(self) -> None:
        """Drop fetched collections, e.g. after a create/update/delete."""
        self._months.clear()

    def get_month_data(self, year: int, month: int) -> MonthData:
        """Fetch (or reuse) the collections of a month.

        Raises:
            BudgetNotFoundError: If the source has no budget for the month.
        """
        key = (year, month)
        if key not in self._months:
            budget = self.source.get_budget(year, month)
            expenses = self.source.list_expenses(
                get_period_start(year, month), get_period_end(year, month)
            )
            self._months[key] = MonthData(
                budget=budget,
                items=self.source.list_budget_items(budget.id),
                planned_expenses=self.source.list_planned_expenses(budget.id),
                planned_incomes=self.source.list_planned_incomes(budget.id),
                expenses=expenses,
                funds=self.source.list_fund_balances(),
                actual_by_category=group_actual_by_category(expenses),
            )
            logger.debug("Fetched collections for %04d-%02d", year, month)
        return self._months[key]

    def get_category_summaries(self, data: MonthData) -> list[CategoryLimitSummary]:
        """Limit summaries for visible categories."""
        return [
            summarize_category_limits(item)
            for item in data.items
            if item.category_id not in self.hidden_categories
        ]

    def get_report(self, year: int, month: int, today: date | None = None) -> BudgetReport:
        """Build the full report for a month.

        Args:
            year: Budget year.
            month: Budget month (1-12).
            today: Reference date for overdue detection.

        Returns:
            BudgetReport with stats, category rows, fund financing,
            per-currency totals and overdue payments.
        """
        data = self.get_month_data(year, month)

        stats = self._stats(
            data.items,
            data.planned_expenses,
            data.planned_incomes,
            data.actual_by_category,
            data.budget.distribution_summary,
        )
        fund_financing = self._fund_financing(data.funds, data.planned_expenses, data.items)
        currency_totals = totals_by_currency(data.planned_expenses, self.base_currency)

        return BudgetReport(
            year=year,
            month=month,
            currency=self.base_currency,
            stats=stats,
            categories=self.get_category_summaries(data),
            fund_financing=[f for f in fund_financing if f.planned_amount > 0],
            currency_totals=currency_totals,
            total_base_amount=total_base_amount(currency_totals),
            overdue=find_overdue_payments(data.planned_expenses, data.planned_incomes, today),
        )
