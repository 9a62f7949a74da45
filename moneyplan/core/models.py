"""Domain models for moneyplan.

All budget data structures are defined here using Pydantic v2 for validation.
Input models mirror the budget API payloads (camelCase or snake_case keys
are both accepted); output models carry the engine's derived figures.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from moneyplan.core.exceptions import InvalidTransitionError
from moneyplan.core.nullable import NullableAmount, NullableDate


class ApiModel(BaseModel):
    """Base for models validated straight from API payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class PlannedExpenseStatus(str, Enum):
    """Lifecycle of a planned expense.

    PENDING -> CONFIRMED | SKIPPED. Terminal states do not revert.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    SKIPPED = "skipped"


class PlannedIncomeStatus(str, Enum):
    """Lifecycle of a planned income.

    PENDING -> RECEIVED | SKIPPED. Terminal states do not revert.
    """

    PENDING = "pending"
    RECEIVED = "received"
    SKIPPED = "skipped"


def can_transition(
    current: PlannedExpenseStatus | PlannedIncomeStatus,
    target: PlannedExpenseStatus | PlannedIncomeStatus,
) -> bool:
    """Check whether a planned item may move from ``current`` to ``target``."""
    if type(current) is not type(target):
        return False
    return current.value == "pending" and target.value != "pending"


def ensure_transition(
    current: PlannedExpenseStatus | PlannedIncomeStatus,
    target: PlannedExpenseStatus | PlannedIncomeStatus,
) -> None:
    """Raise InvalidTransitionError unless the transition is allowed."""
    if not can_transition(current, target):
        raise InvalidTransitionError(current.value, target.value)


# -----------------------------------------------------------------------------
# Budget items and currency limits
# -----------------------------------------------------------------------------


class CurrencyLimit(ApiModel):
    """Limit of a category in one currency.

    total_limit and remaining are taken as sent by the API. When a payload
    omits them they are derived as ``planned_amount + buffer_amount`` and
    ``total_limit - actual_amount``. A negative remaining means overspend in
    this currency.
    """

    id: str | None = None
    currency: str = Field(min_length=1)
    planned_amount: Decimal = Decimal(0)
    buffer_amount: Decimal = Decimal(0)
    total_limit: Decimal | None = None
    actual_amount: Decimal = Decimal(0)
    remaining: Decimal | None = None

    @model_validator(mode="after")
    def default_totals(self) -> "CurrencyLimit":
        """Derive missing totals from the planned and buffer amounts."""
        if self.total_limit is None:
            self.total_limit = self.planned_amount + self.buffer_amount
        if self.remaining is None:
            self.remaining = self.total_limit - self.actual_amount
        return self


class BudgetItem(ApiModel):
    """A category's monthly spending plan.

    Attributes:
        category_id: Category this plan belongs to.
        planned_amount: Discretionary plan in base currency.
        planned_expenses_sum: Sum of mandatory planned expenses in the category.
        total_limit: Overall limit in base currency. Taken as supplied; when
            missing it is ``planned_expenses_sum + Σ buffer_amount`` for
            multi-currency items, else ``planned_amount``.
        actual_amount: Real spend reported for the category.
        currency_limits: Per-currency breakdown (may be empty).
        fund_id: Savings fund financing part of this category.
        fund_allocation: Amount allocated from that fund.
    """

    id: str | None = None
    budget_id: str | None = None
    category_id: str
    category_name: str | None = None
    planned_amount: Decimal = Decimal(0)
    buffer_amount: Decimal = Decimal(0)
    planned_expenses_sum: Decimal = Decimal(0)
    total_limit: Decimal | None = None
    actual_amount: Decimal = Decimal(0)
    currency_limits: list[CurrencyLimit] = Field(default_factory=list)
    fund_id: str | None = None
    fund_allocation: Decimal = Decimal(0)

    @model_validator(mode="after")
    def default_total_limit(self) -> "BudgetItem":
        """Fill total_limit when the payload omits it."""
        if self.total_limit is None:
            if self.currency_limits:
                buffers = sum((cl.buffer_amount for cl in self.currency_limits), Decimal(0))
                self.total_limit = self.planned_expenses_sum + buffers
            else:
                self.total_limit = self.planned_amount
        return self


# -----------------------------------------------------------------------------
# Planned expenses and incomes
# -----------------------------------------------------------------------------


class PlannedExpense(ApiModel):
    """A forecast mandatory obligation (loan installment, rent, ...).

    actual_amount, funded_amount and exchange_rate may arrive as
    ``NullFloat64`` wrappers; they are normalized to ``Decimal | None`` on
    validation. planned_amount_base is the planned amount converted to the
    base currency (defaults to planned_amount).
    """

    id: str
    budget_id: str | None = None
    category_id: str | None = None
    name: str = ""
    planned_amount: Decimal
    planned_amount_base: Decimal | None = None
    currency: str = "RUB"
    exchange_rate: NullableAmount = None
    status: PlannedExpenseStatus = PlannedExpenseStatus.PENDING
    actual_amount: NullableAmount = None
    fund_id: str | None = None
    funded_amount: NullableAmount = None
    planned_date: NullableDate = None

    @model_validator(mode="after")
    def default_planned_amount_base(self) -> "PlannedExpense":
        if self.planned_amount_base is None:
            self.planned_amount_base = self.planned_amount
        return self


class PlannedIncome(ApiModel):
    """An expected income (salary, rent received, ...)."""

    id: str
    budget_id: str | None = None
    source: str = ""
    expected_amount: Decimal
    currency: str = "RUB"
    status: PlannedIncomeStatus = PlannedIncomeStatus.PENDING
    actual_amount: NullableAmount = None
    expected_date: NullableDate = None


# -----------------------------------------------------------------------------
# Funds, expenses and the budget record
# -----------------------------------------------------------------------------


class DistributionSummary(ApiModel):
    """Money earmarked to flow from income into savings funds.

    Computed by the server from distribution rules; only the expected and
    actual totals take part in availability figures.
    """

    total_expected_distribution: Decimal = Decimal(0)
    total_expected_from_planned_distribution: Decimal = Decimal(0)
    total_planned_distribution: Decimal = Decimal(0)
    total_actual_distribution: Decimal = Decimal(0)
    expected_remaining_for_budget: Decimal = Decimal(0)
    actual_remaining_for_budget: Decimal = Decimal(0)
    distribution_difference: Decimal = Decimal(0)


class FundBalance(ApiModel):
    """Current balance of a savings fund."""

    fund_id: str
    name: str = ""
    balance: Decimal = Decimal(0)


class Expense(ApiModel):
    """An actual spending transaction, amount in base currency."""

    id: str | None = None
    category_id: str
    amount: Decimal
    spent_on: date | None = Field(
        default=None, validation_alias=AliasChoices("date", "spentOn", "spent_on")
    )
    currency: str | None = None


class Budget(ApiModel):
    """A monthly budget with its category items."""

    id: str
    year: int = Field(ge=1900)
    month: int = Field(ge=1, le=12)
    items: list[BudgetItem] = Field(default_factory=list)
    distribution_summary: DistributionSummary | None = None
    notes: str | None = None


# -----------------------------------------------------------------------------
# Engine output models
# -----------------------------------------------------------------------------


class BudgetStats(BaseModel):
    """Derived statistics for one monthly budget.

    Income Flow:
        Expected income
        - Category plans (total_planned)
        - Pending mandatory expenses
        - Expected fund distributions
        = Available for planning

        Received income
        - Actual spend (total_actual)
        - Actual fund distributions
        = Actually available
    """

    total_planned: Decimal = Decimal(0)
    total_actual: Decimal = Decimal(0)
    variance: Decimal = Decimal(0)
    is_over_budget: bool = False

    total_planned_expenses: Decimal = Decimal(0)
    pending_planned: Decimal = Decimal(0)
    confirmed_planned: Decimal = Decimal(0)

    # Mandatory expenses financed from savings funds
    planned_from_funds: Decimal = Decimal(0)
    confirmed_from_funds: Decimal = Decimal(0)
    total_from_funds: Decimal = Decimal(0)
    pending_planned_from_budget: Decimal = Decimal(0)
    confirmed_planned_from_budget: Decimal = Decimal(0)

    expected_income: Decimal = Decimal(0)
    received_income: Decimal = Decimal(0)
    pending_income: Decimal = Decimal(0)

    expected_fund_distributions: Decimal = Decimal(0)
    actual_fund_distributions: Decimal = Decimal(0)

    available_for_planning: Decimal = Decimal(0)
    actually_available: Decimal = Decimal(0)


class CurrencyLimitStatus(BaseModel):
    """Display state of one currency row of a category."""

    currency: str
    total_limit: Decimal
    actual_amount: Decimal
    remaining: Decimal  # unclamped
    progress: Decimal  # clamped to 100, for bar width only
    is_over_budget: bool
    is_near_limit: bool
    overflow_percent: Decimal = Decimal(0)


class CategoryLimitSummary(BaseModel):
    """Over/under-budget classification of one category."""

    category_id: str | None = None
    total_limit: Decimal
    actual_amount: Decimal
    remaining: Decimal
    active_currency_limits: list[CurrencyLimit] = Field(default_factory=list)
    has_multi_currency: bool = False
    has_over_budget_currency: bool = False
    is_over_budget: bool = False
    is_under_budget: bool = False
    progress_percent: int = 0
    progress: Decimal = Decimal(0)


class FundFinancing(BaseModel):
    """How much of a fund is planned and used to finance this month."""

    fund_id: str
    name: str
    balance: Decimal
    planned_amount: Decimal = Decimal(0)
    used_amount: Decimal = Decimal(0)
    remaining_after_planned: Decimal = Decimal(0)


class CurrencyTotal(BaseModel):
    """Planned expense totals in one currency (original amounts).

    base_total is the same pending and confirmed money converted to the
    base currency.
    """

    currency: str
    planned: Decimal = Decimal(0)
    pending: Decimal = Decimal(0)
    confirmed: Decimal = Decimal(0)
    base_total: Decimal = Decimal(0)
    skipped_count: int = 0


class OverduePayment(BaseModel):
    """A pending planned expense or income whose date has passed."""

    id: str
    kind: str  # "expense" | "income"
    name: str
    amount: Decimal
    currency: str
    planned_date: date
    days_overdue: int


class BudgetReport(BaseModel):
    """Everything the budget page reads for one month."""

    year: int
    month: int
    currency: str
    stats: BudgetStats
    categories: list[CategoryLimitSummary] = Field(default_factory=list)
    fund_financing: list[FundFinancing] = Field(default_factory=list)
    currency_totals: dict[str, CurrencyTotal] = Field(default_factory=dict)
    total_base_amount: Decimal = Decimal(0)
    overdue: list[OverduePayment] = Field(default_factory=list)
