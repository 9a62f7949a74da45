"""Tests for budget availability calculator functions."""

from decimal import Decimal

from moneyplan.core.models import (
    BudgetItem,
    DistributionSummary,
    Expense,
    FundBalance,
    PlannedExpense,
    PlannedExpenseStatus,
    PlannedIncome,
    PlannedIncomeStatus,
)
from moneyplan.engine.calculator import (
    calculate_budget_stats,
    calculate_fund_financing,
    calculate_income_totals,
    calculate_planned_expense_totals,
    group_actual_by_category,
)


def _expense(id: str, amount: str, status: PlannedExpenseStatus, **kwargs) -> PlannedExpense:
    return PlannedExpense(id=id, planned_amount=Decimal(amount), status=status, **kwargs)


def _income(id: str, amount: str, status: PlannedIncomeStatus, **kwargs) -> PlannedIncome:
    return PlannedIncome(id=id, expected_amount=Decimal(amount), status=status, **kwargs)


class TestGroupActualByCategory:
    """Tests for group_actual_by_category function."""

    def test_empty(self) -> None:
        """Test with no expenses."""
        assert group_actual_by_category([]) == {}
        assert group_actual_by_category(None) == {}

    def test_sums_per_category(self) -> None:
        """Test that amounts are summed per category."""
        expenses = [
            Expense(category_id="food", amount=Decimal("100.50")),
            Expense(category_id="food", amount=Decimal("49.50")),
            Expense(category_id="transport", amount=Decimal("30")),
        ]
        result = group_actual_by_category(expenses)
        assert result == {"food": Decimal("150.00"), "transport": Decimal("30")}


class TestPlannedExpenseTotals:
    """Tests for calculate_planned_expense_totals function."""

    def test_status_split(self) -> None:
        """Test pending/confirmed split and total over all statuses."""
        expenses = [
            _expense("1", "20000", PlannedExpenseStatus.PENDING),
            _expense("2", "10000", PlannedExpenseStatus.CONFIRMED),
            _expense("3", "5000", PlannedExpenseStatus.SKIPPED),
        ]
        totals = calculate_planned_expense_totals(expenses)
        assert totals["total_planned_expenses"] == Decimal("35000")
        assert totals["pending_planned"] == Decimal("20000")
        assert totals["confirmed_planned"] == Decimal("10000")

    def test_confirmed_uses_actual_amount(self) -> None:
        """Test that a confirmed expense counts its actual amount when present."""
        expenses = [
            _expense("1", "10000", PlannedExpenseStatus.CONFIRMED, actual_amount=Decimal("9500")),
        ]
        totals = calculate_planned_expense_totals(expenses)
        assert totals["confirmed_planned"] == Decimal("9500")

    def test_confirmed_absent_wrapper_falls_back_to_planned(self) -> None:
        """Test that an invalid NullFloat64 falls back to the planned amount."""
        expense = PlannedExpense.model_validate(
            {
                "id": "1",
                "planned_amount": 10000,
                "status": "confirmed",
                "actual_amount": {"Float64": 0, "Valid": False},
            }
        )
        totals = calculate_planned_expense_totals([expense])
        assert totals["confirmed_planned"] == Decimal("10000")

    def test_confirmed_zero_actual_is_kept(self) -> None:
        """Test that a present actual amount of zero is not replaced."""
        expenses = [
            _expense("1", "10000", PlannedExpenseStatus.CONFIRMED, actual_amount=Decimal(0)),
        ]
        totals = calculate_planned_expense_totals(expenses)
        assert totals["confirmed_planned"] == Decimal(0)


class TestIncomeTotals:
    """Tests for calculate_income_totals function."""

    def test_status_split(self) -> None:
        """Test expected/received/pending sums."""
        incomes = [
            _income("1", "100000", PlannedIncomeStatus.RECEIVED),
            _income("2", "50000", PlannedIncomeStatus.PENDING),
            _income("3", "7000", PlannedIncomeStatus.SKIPPED),
        ]
        totals = calculate_income_totals(incomes)
        assert totals["expected_income"] == Decimal("157000")
        assert totals["received_income"] == Decimal("100000")
        assert totals["pending_income"] == Decimal("50000")

    def test_received_uses_wrapped_actual(self) -> None:
        """Test that received income unwraps a valid NullFloat64."""
        income = PlannedIncome.model_validate(
            {
                "id": "1",
                "expected_amount": 100000,
                "status": "received",
                "actual_amount": {"Float64": 95000, "Valid": True},
            }
        )
        totals = calculate_income_totals([income])
        assert totals["received_income"] == Decimal("95000")


class TestCalculateBudgetStats:
    """Tests for calculate_budget_stats function."""

    def test_empty_inputs(self) -> None:
        """Test that missing collections are treated as empty."""
        stats = calculate_budget_stats()
        assert stats.total_planned == Decimal(0)
        assert stats.total_actual == Decimal(0)
        assert stats.variance == Decimal(0)
        assert stats.is_over_budget is False
        assert stats.available_for_planning == Decimal(0)
        assert stats.actually_available == Decimal(0)

    def test_overspent_categories(self) -> None:
        """Plan 50000, spend 62000 -> variance -12000, over budget."""
        stats = calculate_budget_stats(
            items=[BudgetItem(category_id="cat1", planned_amount=Decimal("50000"))],
            actual_by_category={"cat1": Decimal("62000")},
        )
        assert stats.total_planned == Decimal("50000")
        assert stats.total_actual == Decimal("62000")
        assert stats.variance == Decimal("-12000")
        assert stats.is_over_budget is True

    def test_actually_available_uses_received_actual(self) -> None:
        """Received 95000 of expected 100000, spent 40000 -> 55000 available."""
        stats = calculate_budget_stats(
            planned_incomes=[
                _income(
                    "1",
                    "100000",
                    PlannedIncomeStatus.RECEIVED,
                    actual_amount=Decimal("95000"),
                )
            ],
            actual_by_category={"cat1": Decimal("40000")},
        )
        assert stats.received_income == Decimal("95000")
        assert stats.actual_fund_distributions == Decimal(0)
        assert stats.actually_available == Decimal("55000")

    def test_available_for_planning(self) -> None:
        """150000 expected - 60000 planned - 20000 pending - 30000 distributions."""
        stats = calculate_budget_stats(
            items=[
                BudgetItem(category_id="food", planned_amount=Decimal("40000")),
                BudgetItem(category_id="fun", planned_amount=Decimal("20000")),
            ],
            planned_expenses=[_expense("1", "20000", PlannedExpenseStatus.PENDING)],
            planned_incomes=[
                _income("1", "100000", PlannedIncomeStatus.PENDING),
                _income("2", "50000", PlannedIncomeStatus.PENDING),
            ],
            distribution_summary=DistributionSummary(
                total_expected_distribution=Decimal("30000"),
            ),
        )
        assert stats.expected_income == Decimal("150000")
        assert stats.expected_fund_distributions == Decimal("30000")
        assert stats.available_for_planning == Decimal("40000")

    def test_skipped_items_contribute_nothing(self) -> None:
        """Test that skipped items are excluded from every status sum."""
        stats = calculate_budget_stats(
            planned_expenses=[
                _expense("1", "9999", PlannedExpenseStatus.SKIPPED, actual_amount=Decimal("9999")),
            ],
            planned_incomes=[
                _income("1", "8888", PlannedIncomeStatus.SKIPPED, actual_amount=Decimal("8888")),
            ],
        )
        assert stats.pending_planned == Decimal(0)
        assert stats.confirmed_planned == Decimal(0)
        assert stats.received_income == Decimal(0)
        assert stats.pending_income == Decimal(0)
        assert stats.actually_available == Decimal(0)

    def test_spend_without_budget_item(self) -> None:
        """Spend in an unplanned category lowers actually_available only."""
        stats = calculate_budget_stats(
            items=[BudgetItem(category_id="food", planned_amount=Decimal("1000"))],
            planned_incomes=[_income("1", "5000", PlannedIncomeStatus.RECEIVED)],
            actual_by_category={"food": Decimal("800"), "gifts": Decimal("700")},
        )
        assert stats.total_planned == Decimal("1000")
        assert stats.total_actual == Decimal("1500")
        assert stats.actually_available == Decimal("3500")
        assert stats.available_for_planning == Decimal("4000")

    def test_headline_figures_diverge_in_sign(self) -> None:
        """Test that the two headline figures are independent."""
        stats = calculate_budget_stats(
            items=[BudgetItem(category_id="food", planned_amount=Decimal("1000"))],
            planned_incomes=[
                _income("1", "500", PlannedIncomeStatus.RECEIVED),
                _income("2", "2000", PlannedIncomeStatus.PENDING),
            ],
            actual_by_category={"food": Decimal("900")},
        )
        assert stats.available_for_planning == Decimal("1500")
        assert stats.actually_available == Decimal("-400")

    def test_fund_financing_subtotals(self) -> None:
        """Test funded amounts are reported without changing headline figures."""
        stats = calculate_budget_stats(
            planned_expenses=[
                _expense("1", "20000", PlannedExpenseStatus.PENDING, funded_amount=Decimal("5000")),
                _expense("2", "10000", PlannedExpenseStatus.CONFIRMED, funded_amount=Decimal("2000")),
            ],
            planned_incomes=[_income("1", "50000", PlannedIncomeStatus.PENDING)],
        )
        assert stats.planned_from_funds == Decimal("5000")
        assert stats.confirmed_from_funds == Decimal("2000")
        assert stats.total_from_funds == Decimal("7000")
        assert stats.pending_planned_from_budget == Decimal("15000")
        assert stats.confirmed_planned_from_budget == Decimal("8000")
        assert stats.available_for_planning == Decimal("30000")

    def test_idempotent(self) -> None:
        """Test that identical inputs give identical output."""
        items = [BudgetItem(category_id="food", planned_amount=Decimal("1000.10"))]
        expenses = [_expense("1", "200.20", PlannedExpenseStatus.PENDING)]
        incomes = [_income("1", "3000.30", PlannedIncomeStatus.RECEIVED)]
        actual = {"food": Decimal("400.40")}
        summary = DistributionSummary(
            total_expected_distribution=Decimal("100"),
            total_actual_distribution=Decimal("50"),
        )

        first = calculate_budget_stats(items, expenses, incomes, actual, summary)
        second = calculate_budget_stats(items, expenses, incomes, actual, summary)
        assert first == second

    def test_decimal_precision(self) -> None:
        """Test that cents do not drift (0.1 + 0.2 style sums)."""
        stats = calculate_budget_stats(
            items=[
                BudgetItem(category_id="a", planned_amount=Decimal("0.1")),
                BudgetItem(category_id="b", planned_amount=Decimal("0.2")),
            ],
            actual_by_category={"a": Decimal("0.3")},
        )
        assert stats.variance == Decimal(0)
        assert stats.is_over_budget is False


class TestCalculateFundFinancing:
    """Tests for calculate_fund_financing function."""

    def test_planned_and_used(self) -> None:
        """Test planned/used amounts from expenses and items."""
        funds = [
            FundBalance(fund_id="f1", name="Housing", balance=Decimal("50000")),
            FundBalance(fund_id="f2", name="Travel", balance=Decimal("6000")),
        ]
        expenses = [
            _expense("1", "25000", PlannedExpenseStatus.CONFIRMED, fund_id="f1", funded_amount=Decimal("4000")),
            _expense("2", "5000", PlannedExpenseStatus.PENDING, fund_id="f1", funded_amount=Decimal("1000")),
        ]
        items = [
            BudgetItem(
                category_id="travel",
                actual_amount=Decimal("9000"),
                fund_id="f2",
                fund_allocation=Decimal("8000"),
            ),
        ]

        result = calculate_fund_financing(funds, expenses, items)

        assert [f.fund_id for f in result] == ["f1", "f2"]
        assert result[0].planned_amount == Decimal("5000")
        assert result[0].used_amount == Decimal("4000")
        assert result[0].remaining_after_planned == Decimal("45000")
        assert result[1].planned_amount == Decimal("8000")
        assert result[1].used_amount == Decimal("8000")
        assert result[1].remaining_after_planned == Decimal("-2000")

    def test_unfunded_expenses_ignored(self) -> None:
        """Test that expenses without a fund do not count."""
        funds = [FundBalance(fund_id="f1", balance=Decimal("100"))]
        expenses = [_expense("1", "50", PlannedExpenseStatus.CONFIRMED, funded_amount=Decimal("50"))]
        result = calculate_fund_financing(funds, expenses, None)
        assert result[0].planned_amount == Decimal(0)
        assert result[0].used_amount == Decimal(0)
