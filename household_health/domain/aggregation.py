"""Aggregator - reduce raw account/transaction/debt snapshots to monthly series and totals"""

import logging
import math
from collections import defaultdict
from datetime import date, datetime
from numbers import Real
from typing import Dict, List, Sequence

from household_health.domain.exceptions import ValidationError
from household_health.domain.models import (
    AccountSnapshot,
    AccountType,
    Aggregates,
    DebtRecord,
    MonthlyAggregate,
    TransactionRecord,
    TransactionType,
)
from household_health.utils.date_utils import add_months, month_start

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_MONTHS = 6


def _require_number(value, record: str, field: str) -> float:
    # bool is a Real subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{record}.{field} must be numeric, got {value!r}", record, field)
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{record}.{field} must be finite, got {value!r}", record, field)
    return number


def _require_date(value, record: str, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise ValidationError(f"{record}.{field} must be a date, got {value!r}", record, field)
    return value


def _require_enum(enum_cls, value, record: str, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"{record}.{field} must be one of [{allowed}], got {value!r}", record, field
        ) from None


def validate_accounts(accounts: Sequence[AccountSnapshot]) -> List[AccountSnapshot]:
    """Check every account and return copies with normalized enum/float fields"""
    validated = []
    for i, acc in enumerate(accounts):
        record = f"accounts[{i}]"
        credit_limit = None
        if acc.credit_limit is not None:
            credit_limit = _require_number(acc.credit_limit, record, "credit_limit")
            if credit_limit < 0:
                raise ValidationError(f"{record}.credit_limit must not be negative", record, "credit_limit")
        validated.append(
            AccountSnapshot(
                id=str(acc.id),
                type=_require_enum(AccountType, acc.type, record, "type"),
                balance=_require_number(acc.balance, record, "balance"),
                credit_limit=credit_limit,
            )
        )
    return validated


def validate_transactions(transactions: Sequence[TransactionRecord]) -> List[TransactionRecord]:
    """Check every transaction; amounts must be non-negative, direction comes from type"""
    validated = []
    for i, txn in enumerate(transactions):
        record = f"transactions[{i}]"
        amount = _require_number(txn.amount, record, "amount")
        if amount < 0:
            raise ValidationError(f"{record}.amount must not be negative, got {amount}", record, "amount")
        validated.append(
            TransactionRecord(
                date=_require_date(txn.date, record, "date"),
                type=_require_enum(TransactionType, txn.type, record, "type"),
                amount=amount,
                account_id=str(txn.account_id),
            )
        )
    return validated


def validate_debts(debts: Sequence[DebtRecord]) -> List[DebtRecord]:
    validated = []
    for i, debt in enumerate(debts):
        record = f"debts[{i}]"
        balance = _require_number(debt.current_balance, record, "current_balance")
        if balance < 0:
            raise ValidationError(f"{record}.current_balance must not be negative", record, "current_balance")
        if not isinstance(debt.is_paid_off, bool):
            raise ValidationError(f"{record}.is_paid_off must be a boolean", record, "is_paid_off")
        validated.append(DebtRecord(current_balance=balance, is_paid_off=debt.is_paid_off))
    return validated


def build_monthly_series(
    transactions: Sequence[TransactionRecord],
    as_of: date,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
) -> List[MonthlyAggregate]:
    """
    Group transactions by calendar month inside the lookback window.

    - Window is the `lookback_months` calendar months ending with the as_of month
    - Transfers are excluded (they move money between own accounts)
    - Months without activity are not synthesized
    """
    last_month = month_start(as_of)
    first_month = add_months(last_month, -(lookback_months - 1))

    income: Dict[date, float] = defaultdict(float)
    expenses: Dict[date, float] = defaultdict(float)
    active = set()
    dropped = 0

    for txn in transactions:
        month = month_start(txn.date)
        if month < first_month or month > last_month:
            dropped += 1
            continue
        if txn.type == TransactionType.INCOME:
            income[month] += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            expenses[month] += txn.amount
        else:
            continue
        active.add(month)

    if dropped:
        logger.debug(
            "Dropped transactions outside lookback window",
            extra={"dropped": dropped, "window_start": first_month.isoformat(), "window_end": last_month.isoformat()},
        )

    return [
        MonthlyAggregate(month=month, income=income[month], expenses=expenses[month])
        for month in sorted(active)
    ]


def aggregate(
    accounts: Sequence[AccountSnapshot],
    transactions: Sequence[TransactionRecord],
    debts: Sequence[DebtRecord],
    as_of: date,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
) -> Aggregates:
    """
    Validate raw snapshots and reduce them to totals and a monthly series.

    Raises:
        ValidationError: On malformed records
    """
    if lookback_months < 1:
        raise ValidationError(f"lookback_months must be at least 1, got {lookback_months}")

    accounts = validate_accounts(accounts)
    transactions = validate_transactions(transactions)
    debts = validate_debts(debts)

    total_balance = 0.0
    total_assets = 0.0
    credit_outstanding = 0.0
    credit_limit_total = 0.0
    limited_outstanding = 0.0

    for acc in accounts:
        if acc.type == AccountType.CREDIT:
            # Providers disagree on sign; outstanding credit is always a liability
            outstanding = abs(acc.balance)
            credit_outstanding += outstanding
            total_balance -= outstanding
            # Utilization only over cards with a known limit
            if acc.credit_limit:
                limited_outstanding += outstanding
                credit_limit_total += acc.credit_limit
            continue
        if acc.balance > 0:
            total_assets += acc.balance
        if acc.type != AccountType.INVESTMENT:
            total_balance += acc.balance

    debt_outstanding = sum(d.current_balance for d in debts if not d.is_paid_off)

    series = build_monthly_series(transactions, as_of, lookback_months)
    months = len(series)
    avg_income = sum(m.income for m in series) / months if months else 0.0
    avg_expenses = sum(m.expenses for m in series) / months if months else 0.0

    current = month_start(as_of)
    current_month = next((m for m in series if m.month == current), None)

    return Aggregates(
        total_balance=total_balance,
        total_assets=total_assets,
        total_liabilities=credit_outstanding + debt_outstanding,
        monthly_series=series,
        current_month_income=current_month.income if current_month else 0.0,
        current_month_expenses=current_month.expenses if current_month else 0.0,
        avg_monthly_income=avg_income,
        avg_monthly_expenses=avg_expenses,
        credit_utilization=limited_outstanding / credit_limit_total if credit_limit_total > 0 else None,
    )
