"""Budget availability calculation engine.

Folds a month's budget items, planned expenses, planned incomes, real spend
and fund distributions into a single BudgetStats record.

Two headline figures come out of it and must stay separate:
    available_for_planning: what is left to allocate, from expected figures.
    actually_available: what is left to spend now, from realized figures.
"""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from moneyplan.core.models import (
    BudgetItem,
    BudgetStats,
    DistributionSummary,
    Expense,
    FundBalance,
    FundFinancing,
    PlannedExpense,
    PlannedExpenseStatus,
    PlannedIncome,
    PlannedIncomeStatus,
)
from moneyplan.core.nullable import amount_or

logger = logging.getLogger(__name__)


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal(0))


def group_actual_by_category(expenses: Iterable[Expense] | None) -> dict[str, Decimal]:
    """Sum real spend per category.

    Args:
        expenses: Expense transactions for the period (amounts in base currency).

    Returns:
        Mapping of category_id to total spent.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses or ():
        totals[expense.category_id] = totals.get(expense.category_id, Decimal(0)) + expense.amount
    return totals


def calculate_planned_expense_totals(
    planned_expenses: Iterable[PlannedExpense],
) -> dict[str, Decimal]:
    """Sum mandatory planned expenses by status.

    Skipped expenses only count towards total_planned_expenses.
    Confirmed ones use their actual amount when known.
    """
    totals = {
        "total_planned_expenses": Decimal(0),
        "pending_planned": Decimal(0),
        "confirmed_planned": Decimal(0),
        "planned_from_funds": Decimal(0),
        "confirmed_from_funds": Decimal(0),
    }

    for expense in planned_expenses:
        totals["total_planned_expenses"] += expense.planned_amount
        funded = expense.funded_amount or Decimal(0)

        if expense.status == PlannedExpenseStatus.PENDING:
            totals["pending_planned"] += expense.planned_amount
            totals["planned_from_funds"] += funded
        elif expense.status == PlannedExpenseStatus.CONFIRMED:
            totals["confirmed_planned"] += amount_or(expense.actual_amount, expense.planned_amount)
            totals["confirmed_from_funds"] += funded

    return totals


def calculate_income_totals(planned_incomes: Iterable[PlannedIncome]) -> dict[str, Decimal]:
    """Sum planned incomes by status.

    Received incomes use their actual amount when known; skipped ones only
    count towards expected_income.
    """
    totals = {
        "expected_income": Decimal(0),
        "received_income": Decimal(0),
        "pending_income": Decimal(0),
    }

    for income in planned_incomes:
        totals["expected_income"] += income.expected_amount

        if income.status == PlannedIncomeStatus.RECEIVED:
            totals["received_income"] += amount_or(income.actual_amount, income.expected_amount)
        elif income.status == PlannedIncomeStatus.PENDING:
            totals["pending_income"] += income.expected_amount

    return totals


def calculate_available_for_planning(
    expected_income: Decimal,
    total_planned: Decimal,
    pending_planned: Decimal,
    expected_fund_distributions: Decimal,
) -> Decimal:
    """Money still free to allocate this month.

    Forward-looking: uses expected income and pending obligations.
    """
    return expected_income - total_planned - pending_planned - expected_fund_distributions


def calculate_actually_available(
    received_income: Decimal,
    total_actual: Decimal,
    actual_fund_distributions: Decimal,
) -> Decimal:
    """Money free to spend right now.

    Realized: uses received income and real spend only.
    """
    return received_income - total_actual - actual_fund_distributions


def calculate_budget_stats(
    items: Iterable[BudgetItem] | None = None,
    planned_expenses: Iterable[PlannedExpense] | None = None,
    planned_incomes: Iterable[PlannedIncome] | None = None,
    actual_by_category: Mapping[str, Decimal] | None = None,
    distribution_summary: DistributionSummary | None = None,
) -> BudgetStats:
    """Calculate budget statistics for one month.

    total_actual comes from real transactions, not from the items, so a
    category with spend but no budget item lowers actually_available without
    touching total_planned.

    Any missing collection is treated as empty; the function never raises on
    well-typed input.

    Args:
        items: Category budget items.
        planned_expenses: Mandatory planned expenses of the budget.
        planned_incomes: Planned incomes of the budget.
        actual_by_category: Real spend per category (see group_actual_by_category).
        distribution_summary: Fund distribution totals, if the budget has any.

    Returns:
        BudgetStats with all derived figures.
    """
    items = list(items or ())
    planned_expenses = list(planned_expenses or ())
    planned_incomes = list(planned_incomes or ())
    actual_by_category = actual_by_category or {}

    total_planned = _sum(item.planned_amount for item in items)
    total_actual = _sum(actual_by_category.values())
    variance = total_planned - total_actual

    expense_totals = calculate_planned_expense_totals(planned_expenses)
    income_totals = calculate_income_totals(planned_incomes)

    if distribution_summary is not None:
        expected_distributions = distribution_summary.total_expected_distribution
        actual_distributions = distribution_summary.total_actual_distribution
    else:
        expected_distributions = Decimal(0)
        actual_distributions = Decimal(0)

    pending_planned = expense_totals["pending_planned"]
    confirmed_planned = expense_totals["confirmed_planned"]
    planned_from_funds = expense_totals["planned_from_funds"]
    confirmed_from_funds = expense_totals["confirmed_from_funds"]

    stats = BudgetStats(
        total_planned=total_planned,
        total_actual=total_actual,
        variance=variance,
        is_over_budget=variance < 0,
        total_planned_expenses=expense_totals["total_planned_expenses"],
        pending_planned=pending_planned,
        confirmed_planned=confirmed_planned,
        planned_from_funds=planned_from_funds,
        confirmed_from_funds=confirmed_from_funds,
        total_from_funds=planned_from_funds + confirmed_from_funds,
        pending_planned_from_budget=pending_planned - planned_from_funds,
        confirmed_planned_from_budget=confirmed_planned - confirmed_from_funds,
        expected_income=income_totals["expected_income"],
        received_income=income_totals["received_income"],
        pending_income=income_totals["pending_income"],
        expected_fund_distributions=expected_distributions,
        actual_fund_distributions=actual_distributions,
        available_for_planning=calculate_available_for_planning(
            income_totals["expected_income"],
            total_planned,
            pending_planned,
            expected_distributions,
        ),
        actually_available=calculate_actually_available(
            income_totals["received_income"],
            total_actual,
            actual_distributions,
        ),
    )

    logger.debug(
        "Budget stats: %d items, %d planned expenses, %d planned incomes -> "
        "available_for_planning=%s actually_available=%s",
        len(items),
        len(planned_expenses),
        len(planned_incomes),
        stats.available_for_planning,
        stats.actually_available,
    )
    return stats


def calculate_fund_financing(
    funds: Iterable[FundBalance] | None,
    planned_expenses: Iterable[PlannedExpense] | None,
    items: Iterable[BudgetItem] | None,
) -> list[FundFinancing]:
    """Calculate how much of each fund this month's budget relies on.

    Planned amounts come from funded planned expenses and from budget items
    with a fund allocation. Used amounts count funded expenses once confirmed,
    and for items the actual spend capped at the allocation.

    Args:
        funds: Fund balances.
        planned_expenses: Planned expenses (funded_amount/fund_id).
        items: Budget items (fund_id/fund_allocation).

    Returns:
        One FundFinancing per fund, in input order.
    """
    planned: dict[str, Decimal] = {}
    used: dict[str, Decimal] = {}

    for expense in planned_expenses or ():
        funded = expense.funded_amount
        if not expense.fund_id or funded is None or funded <= 0:
            continue
        planned[expense.fund_id] = planned.get(expense.fund_id, Decimal(0)) + funded
        if expense.status == PlannedExpenseStatus.CONFIRMED:
            used[expense.fund_id] = used.get(expense.fund_id, Decimal(0)) + funded

    for item in items or ():
        if not item.fund_id or item.fund_allocation <= 0:
            continue
        planned[item.fund_id] = planned.get(item.fund_id, Decimal(0)) + item.fund_allocation
        used_from_fund = min(item.actual_amount, item.fund_allocation)
        if used_from_fund > 0:
            used[item.fund_id] = used.get(item.fund_id, Decimal(0)) + used_from_fund

    result = []
    for fund in funds or ():
        fund_planned = planned.get(fund.fund_id, Decimal(0))
        result.append(
            FundFinancing(
                fund_id=fund.fund_id,
                name=fund.name,
                balance=fund.balance,
                planned_amount=fund_planned,
                used_amount=used.get(fund.fund_id, Decimal(0)),
                remaining_after_planned=fund.balance - fund_planned,
            )
        )
    return result
