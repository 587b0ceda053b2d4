"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable, List, Optional
from fastapi.testclient import TestClient
from household_health.api.main import create_app
from household_health.domain.alerts import AssessmentContext
from household_health.domain.factors import months_of_reserve, savings_rate_percent
from household_health.domain.projection import project_balance
from household_health.domain.models import (
    AccountSnapshot,
    AccountType,
    Aggregates,
    TransactionRecord,
    TransactionType,
)
from household_health.utils.date_utils import add_months, month_start


AS_OF = date(2026, 6, 15)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def as_of() -> date:
    """Fixed assessment date so month labels and windows are reproducible"""
    return AS_OF


def build_history(
    months: int,
    income: float,
    expenses: float,
    as_of: date = AS_OF,
    account_id: str = "chk",
) -> List[TransactionRecord]:
    """One income and one expense per month, ending with the as_of month"""
    last = month_start(as_of)
    transactions = []
    for offset in range(months - 1, -1, -1):
        day = add_months(last, -offset).replace(day=5)
        if income:
            transactions.append(TransactionRecord(day, TransactionType.INCOME, income, account_id))
        if expenses:
            transactions.append(TransactionRecord(day, TransactionType.EXPENSE, expenses, account_id))
    return transactions


@pytest.fixture
def history() -> Callable[..., List[TransactionRecord]]:
    return build_history


@pytest.fixture
def checking() -> Callable[[float], List[AccountSnapshot]]:
    """Single checking account holding the whole balance"""

    def _checking(balance: float) -> List[AccountSnapshot]:
        return [AccountSnapshot(id="chk", type=AccountType.CHECKING, balance=balance)]

    return _checking


@pytest.fixture
def make_context() -> Callable[..., AssessmentContext]:
    """Rule-table context built from flat monthly averages"""

    def _make_context(
        total_balance: float = 12000.0,
        income: float = 3000.0,
        expenses: float = 2000.0,
        spending_trend: float = 0.0,
        credit_utilization: Optional[float] = None,
    ) -> AssessmentContext:
        aggregates = Aggregates(
            total_balance=total_balance,
            total_assets=max(total_balance, 0.0),
            total_liabilities=0.0,
            monthly_series=[],
            current_month_income=income,
            current_month_expenses=expenses,
            avg_monthly_income=income,
            avg_monthly_expenses=expenses,
            credit_utilization=credit_utilization,
        )
        return AssessmentContext(
            aggregates=aggregates,
            months_of_reserve=months_of_reserve(total_balance, expenses),
            savings_rate=savings_rate_percent(income, expenses),
            spending_trend=spending_trend,
            projection=project_balance(total_balance, income, expenses, AS_OF),
        )

    return _make_context
