"""Shared fixtures: a March 2024 budget snapshot in API payload shape."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def snapshot_data() -> dict:
    """Budget API responses for March 2024.

    expected income 150000 (100000 received as 95000, 50000 pending)
    category plans 60000, pending mandatory 20000, expected distributions 30000
    real spend in March 35000, actual distributions 10000
    """
    return {
        "budgets": [
            {
                "id": "b-2024-03",
                "year": 2024,
                "month": 3,
                "items": [
                    {
                        "categoryId": "food",
                        "plannedAmount": 40000,
                        "totalLimit": 40000,
                        "actualAmount": 30000,
                    },
                    {
                        "categoryId": "travel",
                        "plannedAmount": 20000,
                        "plannedExpensesSum": 0,
                        "actualAmount": 5000,
                        "currencyLimits": [
                            {"currency": "RUB", "plannedAmount": 0, "bufferAmount": 20000, "actualAmount": 5000},
                            {"currency": "USD", "plannedAmount": 200, "bufferAmount": 50, "actualAmount": 260},
                            {"currency": "EUR", "plannedAmount": 0, "bufferAmount": 0, "actualAmount": 0},
                        ],
                        "fundId": "fund-travel",
                        "fundAllocation": 8000,
                    },
                ],
                "distributionSummary": {
                    "totalExpectedDistribution": 30000,
                    "totalActualDistribution": 10000,
                },
            }
        ],
        "plannedExpenses": [
            {
                "id": "pe-loan",
                "budget_id": "b-2024-03",
                "category_id": "credit",
                "name": "Loan installment",
                "planned_amount": 20000,
                "currency": "RUB",
                "status": "pending",
                "planned_date": "2024-03-05",
            },
            {
                "id": "pe-rent",
                "budget_id": "b-2024-03",
                "category_id": "housing",
                "name": "Rent",
                "planned_amount": 25000,
                "currency": "RUB",
                "status": "confirmed",
                "actual_amount": {"Float64": 24000, "Valid": True},
                "fund_id": "fund-housing",
                "funded_amount": {"Float64": 4000, "Valid": True},
                "planned_date": {"Time": "2024-03-01T00:00:00Z", "Valid": True},
            },
            {
                "id": "pe-gym",
                "budget_id": "b-2024-03",
                "category_id": "health",
                "name": "Gym",
                "planned_amount": 50,
                "currency": "USD",
                "status": "skipped",
                "planned_date": "2024-03-02",
            },
        ],
        "plannedIncomes": [
            {
                "id": "pi-salary",
                "budget_id": "b-2024-03",
                "source": "Salary",
                "expected_amount": 100000,
                "currency": "RUB",
                "status": "received",
                "actual_amount": {"Float64": 95000, "Valid": True},
                "expected_date": "2024-03-01",
            },
            {
                "id": "pi-bonus",
                "budget_id": "b-2024-03",
                "source": "Bonus",
                "expected_amount": 50000,
                "currency": "RUB",
                "status": "pending",
                "expected_date": {"Time": "2024-03-10T00:00:00Z", "Valid": True},
            },
        ],
        "expenses": [
            {"id": "e1", "categoryId": "food", "amount": 30000, "date": "2024-03-03"},
            {"id": "e2", "categoryId": "transport", "amount": 5000, "date": "2024-03-12"},
            {"id": "e3", "categoryId": "food", "amount": 7000, "date": "2024-04-02"},
        ],
        "funds": [
            {"fundId": "fund-housing", "name": "Housing", "balance": 50000},
            {"fundId": "fund-travel", "name": "Travel", "balance": 6000},
            {"fundId": "fund-idle", "name": "Idle", "balance": 1000},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict) -> Path:
    """Snapshot fixture written to a JSON file."""
    path = tmp_path / "budget.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path
