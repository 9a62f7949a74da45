"""Budget engine: availability figures and currency limit classification.

Both calculators are pure functions over snapshots of budget collections.
"""

from moneyplan.engine.calculator import (
    calculate_budget_stats,
    calculate_fund_financing,
    group_actual_by_category,
)
from moneyplan.engine.limits import summarize_category_limits, summarize_currency_limit

__all__ = [
    "calculate_budget_stats",
    "calculate_fund_financing",
    "group_actual_by_category",
    "summarize_category_limits",
    "summarize_currency_limit",
]
