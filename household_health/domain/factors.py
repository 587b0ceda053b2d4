"""Factor scoring - four independent 0-100 health factors"""

import logging
from typing import Optional, Sequence, Tuple

from household_health.domain.models import FutureProjection, MonthlyAggregate

logger = logging.getLogger(__name__)

Breakpoints = Sequence[Tuple[float, float]]

# (input, score) pairs, linearly interpolated and clamped at both ends.
# Emergency-fund guidance (3-6 months) sits at the middle of the scale.
LIQUIDITY_BREAKPOINTS: Breakpoints = ((0, 0), (1, 20), (3, 40), (6, 60), (9, 80), (12, 100))
SAVINGS_RATE_BREAKPOINTS: Breakpoints = ((-50, 0), (0, 20), (10, 50), (20, 75), (50, 100))
# Declining spend scores higher
TREND_BREAKPOINTS: Breakpoints = ((-50, 100), (-10, 90), (0, 70), (10, 40), (25, 20), (100, 0))

NEUTRAL_TREND_SCORE = 50.0
RESERVE_MARGIN_TARGET_MONTHS = 6.0
SHORTFALL_BASE_SCORES = {1: 0.0, 2: 20.0, 3: 40.0}


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(value, high))


def interpolate(x: float, breakpoints: Breakpoints) -> float:
    """Piecewise-linear lookup; inputs outside the table take the end values"""
    if x <= breakpoints[0][0]:
        return float(breakpoints[0][1])
    for (x0, y0), (x1, y1) in zip(breakpoints, breakpoints[1:]):
        if x <= x1:
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return float(breakpoints[-1][1])


def months_of_reserve(total_balance: float, avg_monthly_expenses: float) -> float:
    return total_balance / max(avg_monthly_expenses, 1.0)


def savings_rate_percent(avg_monthly_income: float, avg_monthly_expenses: float) -> float:
    """Share of income kept, in percent; 0 when there is no income"""
    if avg_monthly_income <= 0:
        return 0.0
    return (avg_monthly_income - avg_monthly_expenses) / avg_monthly_income * 100


def spending_trend_percent(series: Sequence[MonthlyAggregate]) -> Optional[float]:
    """
    Percent change of the latest month's expenses against the average of
    the earlier months. None when there is not enough history to tell.
    """
    if len(series) < 2:
        return None
    prior = series[:-1]
    prior_avg = sum(m.expenses for m in prior) / len(prior)
    if prior_avg <= 0:
        return None
    return (series[-1].expenses - prior_avg) / prior_avg * 100


def liquidity_factor(reserve_months: float) -> float:
    return clamp(interpolate(reserve_months, LIQUIDITY_BREAKPOINTS))


def savings_rate_factor(avg_monthly_income: float, avg_monthly_expenses: float) -> float:
    # Cannot save from nothing
    if avg_monthly_income <= 0:
        return 0.0
    rate = savings_rate_percent(avg_monthly_income, avg_monthly_expenses)
    return clamp(interpolate(rate, SAVINGS_RATE_BREAKPOINTS))


def trend_factor(spending_trend: Optional[float]) -> float:
    if spending_trend is None:
        logger.debug("Insufficient history for spending trend, using neutral score")
        return NEUTRAL_TREND_SCORE
    return clamp(interpolate(spending_trend, TREND_BREAKPOINTS))


def future_risk_factor(projection: FutureProjection, avg_monthly_expenses: float) -> float:
    """
    Score the raw projection (not the liquidity score).

    - No shortfall: 80-100, scaled by the lowest projected balance measured
      in months of expenses
    - Shortfall: 0-10 / 20-30 / 40-50 for month 1 / 2 / 3, the shallower
      the first negative balance the higher within the band
    """
    expense_base = max(avg_monthly_expenses, 1.0)

    if not projection.will_go_negative:
        lowest = min((m.projected_balance for m in projection.months), default=0.0)
        margin = max(lowest, 0.0) / expense_base
        return clamp(80.0 + 20.0 * min(margin / RESERVE_MARGIN_TARGET_MONTHS, 1.0))

    index = projection.months_until_negative
    base = SHORTFALL_BASE_SCORES.get(index, 0.0)
    deficit = -projection.months[index - 1].projected_balance
    depth = min(deficit / expense_base, 1.0)
    return clamp(base + 10.0 * (1.0 - depth))
