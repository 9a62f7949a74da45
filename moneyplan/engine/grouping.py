"""Per-currency grouping and overdue detection for planned items."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from moneyplan.core.models import (
    CurrencyTotal,
    OverduePayment,
    PlannedExpense,
    PlannedExpenseStatus,
    PlannedIncome,
    PlannedIncomeStatus,
)
from moneyplan.core.nullable import amount_or


def totals_by_currency(
    planned_expenses: Iterable[PlannedExpense] | None,
    base_currency: str = "RUB",
) -> dict[str, CurrencyTotal]:
    """Group planned expense totals by their original currency.

    Skipped expenses are only counted, never summed. The base-currency total
    of a confirmed expense with an actual amount uses that expense's exchange
    rate (1 when absent); every other counted expense adds its
    planned_amount_base.

    Args:
        planned_expenses: Planned expenses to group.
        base_currency: Currency assumed for expenses without one.

    Returns:
        Mapping of currency code to CurrencyTotal, in first-seen order.
    """
    totals: dict[str, CurrencyTotal] = {}

    for expense in planned_expenses or ():
        currency = expense.currency or base_currency
        total = totals.setdefault(currency, CurrencyTotal(currency=currency))
        planned_base = amount_or(expense.planned_amount_base, expense.planned_amount)

        if expense.status == PlannedExpenseStatus.PENDING:
            total.pending += expense.planned_amount
            total.planned += expense.planned_amount
            total.base_total += planned_base
        elif expense.status == PlannedExpenseStatus.CONFIRMED:
            total.planned += expense.planned_amount
            if expense.actual_amount is not None:
                total.confirmed += expense.actual_amount
                rate = amount_or(expense.exchange_rate, Decimal(1))
                total.base_total += expense.actual_amount * rate
            else:
                total.confirmed += expense.planned_amount
                total.base_total += planned_base
        else:
            total.skipped_count += 1

    return totals


def total_base_amount(totals: dict[str, CurrencyTotal]) -> Decimal:
    """Sum the base-currency totals of all currency groups."""
    return sum((t.base_total for t in totals.values()), Decimal(0))


def find_overdue_payments(
    planned_expenses: Iterable[PlannedExpense] | None,
    planned_incomes: Iterable[PlannedIncome] | None,
    today: date | None = None,
) -> list[OverduePayment]:
    """Find pending planned payments whose date is already past.

    Items without a date are never overdue.

    Args:
        planned_expenses: Planned expenses to check.
        planned_incomes: Planned incomes to check.
        today: Reference date (defaults to today).

    Returns:
        Overdue payments, most overdue first.
    """
    if today is None:
        today = date.today()

    result: list[OverduePayment] = []

    for expense in planned_expenses or ():
        if expense.status != PlannedExpenseStatus.PENDING or expense.planned_date is None:
            continue
        if expense.planned_date < today:
            result.append(
                OverduePayment(
                    id=expense.id,
                    kind="expense",
                    name=expense.name,
                    amount=expense.planned_amount,
                    currency=expense.currency,
                    planned_date=expense.planned_date,
                    days_overdue=(today - expense.planned_date).days,
                )
            )

    for income in planned_incomes or ():
        if income.status != PlannedIncomeStatus.PENDING or income.expected_date is None:
            continue
        if income.expected_date < today:
            result.append(
                OverduePayment(
                    id=income.id,
                    kind="income",
                    name=income.source,
                    amount=income.expected_amount,
                    currency=income.currency,
                    planned_date=income.expected_date,
                    days_overdue=(today - income.expected_date).days,
                )
            )

    result.sort(key=lambda p: p.days_overdue, reverse=True)
    return result
