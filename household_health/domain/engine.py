"""Health engine - main entry point composing the scoring pipeline"""

from datetime import date
from typing import Optional, Sequence

from household_health.domain.aggregation import DEFAULT_LOOKBACK_MONTHS, aggregate
from household_health.domain.alerts import AssessmentContext, identify_alerts
from household_health.domain.classification import calculate_health_score, classify_score
from household_health.domain.factors import (
    future_risk_factor,
    liquidity_factor,
    months_of_reserve,
    savings_rate_factor,
    savings_rate_percent,
    spending_trend_percent,
    trend_factor,
)
from household_health.domain.models import (
    AccountSnapshot,
    DebtRecord,
    FinancialHealthResult,
    ScoreFactors,
    TransactionRecord,
)
from household_health.domain.projection import project_balance
from household_health.domain.suggestions import generate_suggestions


def compute(
    accounts: Sequence[AccountSnapshot],
    transactions: Sequence[TransactionRecord],
    debts: Sequence[DebtRecord],
    as_of: Optional[date] = None,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
) -> FinancialHealthResult:
    """
    Assess a household's financial health.

    Flow:
    1. Aggregate snapshots into totals and a monthly series
    2. Project balance over the forecast horizon
    3. Score the four factors
    4. Combine into score and classification
    5. Evaluate alert and suggestion rule tables

    Pure function of its inputs: as_of defaults to today, pass it explicitly
    for reproducible output.

    Raises:
        ValidationError: On malformed input records
    """
    if as_of is None:
        as_of = date.today()

    aggregates = aggregate(accounts, transactions, debts, as_of, lookback_months)

    reserve = months_of_reserve(aggregates.total_balance, aggregates.avg_monthly_expenses)
    savings_rate = savings_rate_percent(aggregates.avg_monthly_income, aggregates.avg_monthly_expenses)
    trend = spending_trend_percent(aggregates.monthly_series)

    projection = project_balance(
        aggregates.total_balance,
        aggregates.avg_monthly_income,
        aggregates.avg_monthly_expenses,
        as_of,
    )

    factors = ScoreFactors(
        liquidity=liquidity_factor(reserve),
        savings_rate=savings_rate_factor(aggregates.avg_monthly_income, aggregates.avg_monthly_expenses),
        trend=trend_factor(trend),
        future_risk=future_risk_factor(projection, aggregates.avg_monthly_expenses),
    )
    score = calculate_health_score(factors)

    ctx = AssessmentContext(
        aggregates=aggregates,
        months_of_reserve=reserve,
        savings_rate=savings_rate,
        spending_trend=trend if trend is not None else 0.0,
        projection=projection,
    )

    return FinancialHealthResult(
        score=score,
        classification=classify_score(score),
        total_balance=aggregates.total_balance,
        months_of_reserve=reserve,
        savings_rate=savings_rate,
        spending_trend=ctx.spending_trend,
        factors=factors,
        future_projection=projection,
        alerts=identify_alerts(ctx),
        suggestions=generate_suggestions(ctx, factors),
    )
