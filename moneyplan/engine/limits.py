"""Currency limit aggregation.

Reduces a category's per-currency limits plus its base-currency pair
(total_limit, actual_amount) into an over/under-budget classification.
Clamping only ever applies to progress-bar values; the classification always
uses unclamped remaining amounts.
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from moneyplan.core.models import (
    CategoryLimitSummary,
    CurrencyLimit,
    CurrencyLimitStatus,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)
DEFAULT_NEAR_LIMIT_THRESHOLD = Decimal(80)
MAX_OVERFLOW_PERCENT = Decimal(50)


class LimitedCategory(Protocol):
    """Anything carrying a base-currency limit and per-currency limits."""

    actual_amount: Decimal
    total_limit: Decimal | None
    currency_limits: Sequence[CurrencyLimit]


def active_currency_limits(limits: Iterable[CurrencyLimit] | None) -> list[CurrencyLimit]:
    """Drop currencies with neither a plan nor any spend."""
    if not limits:
        return []
    return [cl for cl in limits if cl.total_limit > 0 or cl.actual_amount > 0]


def calculate_progress(actual: Decimal, limit: Decimal) -> Decimal:
    """Unclamped spend progress in percent (0 when no limit is set)."""
    if limit <= 0:
        return Decimal(0)
    return actual / limit * HUNDRED


def round_percent(value: Decimal) -> int:
    """Round a percentage to an integer, halves away from zero."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def summarize_currency_limit(
    limit: CurrencyLimit,
    near_limit_threshold: Decimal = DEFAULT_NEAR_LIMIT_THRESHOLD,
) -> CurrencyLimitStatus:
    """Build the display state of one currency row.

    Args:
        limit: Currency limit to summarize.
        near_limit_threshold: Progress (percent) from which a non-overspent
            row is flagged as close to its limit.

    Returns:
        CurrencyLimitStatus with clamped progress and unclamped remaining.
    """
    progress = calculate_progress(limit.actual_amount, limit.total_limit)
    is_over = limit.remaining < 0
    overflow = min(progress - HUNDRED, MAX_OVERFLOW_PERCENT) if is_over else Decimal(0)

    return CurrencyLimitStatus(
        currency=limit.currency,
        total_limit=limit.total_limit,
        actual_amount=limit.actual_amount,
        remaining=limit.remaining,
        progress=min(progress, HUNDRED),
        is_over_budget=is_over,
        is_near_limit=progress >= near_limit_threshold and not is_over,
        overflow_percent=max(overflow, Decimal(0)),
    )


def summarize_category_limits(
    category: LimitedCategory,
    category_id: str | None = None,
) -> CategoryLimitSummary:
    """Classify a category as over or under budget.

    The category is over budget when its base-currency limit is exceeded OR
    any active currency is overspent. Neither signal takes precedence.
    A category with no limit set is never over budget on the base pair,
    whatever it spent. A base-currency surplus still sets is_under_budget
    when a currency is overspent, so both flags can be true; callers show
    the over-budget state first.

    Args:
        category: BudgetItem or any object with actual_amount, total_limit
            and currency_limits.
        category_id: Identifier to put on the summary (defaults to the
            category's own category_id attribute, if any).

    Returns:
        CategoryLimitSummary for the category.
    """
    total_limit = category.total_limit or Decimal(0)
    actual = category.actual_amount
    diff = total_limit - actual

    active = active_currency_limits(getattr(category, "currency_limits", None))
    has_multi_currency = len(active) > 0
    has_over_budget_currency = has_multi_currency and any(cl.remaining < 0 for cl in active)

    is_over_budget = (total_limit > 0 and diff < 0) or has_over_budget_currency
    is_under_budget = total_limit > 0 and diff > 0 and actual > 0

    progress = calculate_progress(actual, total_limit)

    summary = CategoryLimitSummary(
        category_id=category_id or getattr(category, "category_id", None),
        total_limit=total_limit,
        actual_amount=actual,
        remaining=diff,
        active_currency_limits=active,
        has_multi_currency=has_multi_currency,
        has_over_budget_currency=has_over_budget_currency,
        is_over_budget=is_over_budget,
        is_under_budget=is_under_budget,
        progress_percent=round_percent(progress),
        progress=min(progress, HUNDRED),
    )
    if summary.is_over_budget:
        logger.debug(
            "Category %s over budget (base diff %s, currency overspend %s)",
            summary.category_id,
            diff,
            has_over_budget_currency,
        )
    return summary


def sort_currency_limits(
    limits: Iterable[CurrencyLimit],
    base_currency: str = "RUB",
) -> list[CurrencyLimit]:
    """Order currency rows: base currency first, then largest limit first."""
    return sorted(
        limits,
        key=lambda cl: (cl.currency != base_currency, -cl.total_limit),
    )
