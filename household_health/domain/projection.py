"""Projector - forward cash balance projection used as an early-warning signal"""

from datetime import date
from typing import List, Optional

from household_health.domain.models import FutureProjection, FutureProjectionMonth
from household_health.utils.date_utils import add_months, month_label, month_start

FORECAST_HORIZON_MONTHS = 3


def project_balance(
    total_balance: float,
    avg_monthly_income: float,
    avg_monthly_expenses: float,
    as_of: date,
    horizon: int = FORECAST_HORIZON_MONTHS,
) -> FutureProjection:
    """
    Extrapolate balance month by month from recent averages.

    Flat extrapolation: no seasonality, every projected month uses the
    same income and expense. With no history both averages are 0 and the
    projection stays flat at the current balance.
    """
    start = month_start(as_of)
    balance = total_balance
    months: List[FutureProjectionMonth] = []
    months_until_negative: Optional[int] = None

    for i in range(1, horizon + 1):
        balance = balance + avg_monthly_income - avg_monthly_expenses
        months.append(
            FutureProjectionMonth(
                month=month_label(add_months(start, i)),
                projected_income=avg_monthly_income,
                projected_expenses=avg_monthly_expenses,
                projected_balance=balance,
            )
        )
        if months_until_negative is None and balance < 0:
            months_until_negative = i

    return FutureProjection(
        months=months,
        will_go_negative=months_until_negative is not None,
        months_until_negative=months_until_negative,
    )
