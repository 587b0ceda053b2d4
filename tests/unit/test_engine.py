"""Unit tests for the complete assessment pipeline"""

import json
import pytest
from dataclasses import asdict
from household_health.domain.engine import compute
from household_health.domain.exceptions import ValidationError
from household_health.domain.models import (
    AccountSnapshot,
    AccountType,
    Classification,
    DebtRecord,
    Severity,
    TransactionRecord,
    TransactionType,
)


def test_steady_saver_six_months_of_reserve(checking, history, as_of):
    """$12k balance, $3k income, $2k expenses, six flat months"""
    result = compute(checking(12000), history(6, 3000, 2000), [], as_of)

    assert result.months_of_reserve == 6.0
    assert 60 <= result.factors.liquidity < 80
    assert result.future_projection.will_go_negative is False
    assert result.future_projection.months_until_negative is None
    assert result.spending_trend == 0
    assert result.alerts == []


def test_overspender_with_thin_reserve(checking, history, as_of):
    """$500 balance, $2k income, $2.5k expenses"""
    result = compute(checking(500), history(6, 2000, 2500), [], as_of)

    assert result.months_of_reserve == pytest.approx(0.2)
    assert 0 <= result.factors.liquidity < 20
    assert result.future_projection.will_go_negative is True
    # Month 1 lands exactly on $0, the first negative month is 2
    assert result.future_projection.months_until_negative == 2
    shortfall = next(a for a in result.alerts if a.id == "projected_shortfall")
    assert shortfall.severity == Severity.CRITICAL
    assert shortfall.title == "Projected shortfall"
    assert result.classification in (Classification.POOR, Classification.CRITICAL)


def test_shortfall_in_first_month(checking, history, as_of):
    result = compute(checking(400), history(6, 2000, 2500), [], as_of)

    assert result.future_projection.months_until_negative == 1
    assert 0 <= result.factors.future_risk < 10
    assert "projected_shortfall" in [a.id for a in result.alerts]


def test_no_transaction_history(checking, as_of):
    """$5k balance and nothing else: neutral trend, flat projection"""
    result = compute(checking(5000), [], [], as_of)

    assert result.factors.trend == 50
    assert [m.projected_balance for m in result.future_projection.months] == [5000, 5000, 5000]
    assert result.future_projection.will_go_negative is False
    assert result.savings_rate == 0
    assert result.factors.savings_rate == 0
    assert result.spending_trend == 0


def test_spending_more_than_earning(checking, history, as_of):
    """$4k income, $4.5k expenses"""
    result = compute(checking(50000), history(6, 4000, 4500), [], as_of)

    assert result.savings_rate == -12.5
    assert 0 <= result.factors.savings_rate < 20
    warning = next(a for a in result.alerts if a.id == "spending_exceeds_income")
    assert warning.severity == Severity.WARNING
    assert warning.title == "Spending more than earning"


def test_transfer_only_month_leaves_reserve_unchanged(checking, as_of):
    transactions = [
        TransactionRecord(as_of.replace(month=5, day=10), TransactionType.TRANSFER, 500, "chk"),
        TransactionRecord(as_of.replace(day=1), TransactionType.INCOME, 3000, "chk"),
        TransactionRecord(as_of.replace(day=2), TransactionType.EXPENSE, 2000, "chk"),
    ]

    result = compute(checking(6000), transactions, [], as_of)

    assert result.months_of_reserve == 3.0


def test_single_month_history_is_neutral_trend(checking, history, as_of):
    result = compute(checking(8000), history(1, 3000, 2500), [], as_of)

    assert result.factors.trend == 50
    assert result.spending_trend == 0


def test_rising_expenses_feed_trend(checking, as_of):
    transactions = [
        TransactionRecord(as_of.replace(month=3, day=1), TransactionType.EXPENSE, 1000, "chk"),
        TransactionRecord(as_of.replace(month=4, day=1), TransactionType.EXPENSE, 1000, "chk"),
        TransactionRecord(as_of.replace(month=5, day=1), TransactionType.EXPENSE, 1000, "chk"),
        TransactionRecord(as_of.replace(month=6, day=1), TransactionType.EXPENSE, 1500, "chk"),
    ]

    result = compute(checking(20000), transactions, [], as_of)

    assert result.spending_trend == pytest.approx(50.0)
    assert result.factors.trend < 20
    assert "rising_expenses" in [a.id for a in result.alerts]


def test_empty_household_is_not_an_error(as_of):
    result = compute([], [], [], as_of)

    assert result.total_balance == 0
    assert 0 <= result.score <= 100
    assert result.future_projection.will_go_negative is False


def test_debts_do_not_change_liquid_balance(checking, history, as_of):
    with_debt = compute(checking(12000), history(6, 3000, 2000), [DebtRecord(9000)], as_of)
    without_debt = compute(checking(12000), history(6, 3000, 2000), [], as_of)

    assert with_debt.total_balance == without_debt.total_balance
    assert with_debt.score == without_debt.score


def test_invalid_input_raises_validation_error(checking, as_of):
    bad = [TransactionRecord("last tuesday", TransactionType.EXPENSE, 10, "chk")]

    with pytest.raises(ValidationError):
        compute(checking(100), bad, [], as_of)


def test_repeated_calls_are_identical(history, as_of):
    accounts = [
        AccountSnapshot("chk", AccountType.CHECKING, 2300.55),
        AccountSnapshot("cc", AccountType.CREDIT, 900, credit_limit=1500),
    ]
    transactions = history(5, 3100.10, 2950.40)

    first = compute(accounts, transactions, [], as_of)
    second = compute(accounts, transactions, [], as_of)

    assert first == second
    assert json.dumps(asdict(first), default=str) == json.dumps(asdict(second), default=str)


def test_default_as_of_is_today(checking):
    result = compute(checking(1000), [], [])

    assert len(result.future_projection.months) == 3


@pytest.mark.parametrize("balance", [-5000, 0, 300, 2500, 12000, 250000])
@pytest.mark.parametrize("income, expenses", [(0, 0), (0, 1500), (2000, 2500), (4000, 4500), (6000, 2000)])
def test_score_and_factors_stay_in_range(checking, history, as_of, balance, income, expenses):
    result = compute(checking(balance), history(6, income, expenses), [], as_of)

    assert 0 <= result.score <= 100
    for value in asdict(result.factors).values():
        assert 0 <= value <= 100
    assert isinstance(result.score, int)


@pytest.mark.parametrize("score_band", [Classification.EXCELLENT, Classification.CRITICAL])
def test_classification_matches_score(checking, history, as_of, score_band):
    if score_band == Classification.EXCELLENT:
        result = compute(checking(60000), history(6, 8000, 4000), [], as_of)
        assert result.score >= 80
    else:
        result = compute(checking(-2000), history(6, 1000, 3000), [], as_of)
        assert result.score < 20
    assert result.classification == score_band
