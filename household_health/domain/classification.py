"""Classifier - weighted overall score and qualitative band"""

import math

from household_health.domain.models import Classification, ScoreFactors

# Liquidity and future risk carry solvency risk, so they weigh the most
FACTOR_WEIGHTS = {
    "liquidity": 0.30,
    "savings_rate": 0.25,
    "trend": 0.20,
    "future_risk": 0.25,
}

# Lower bound (inclusive) of each band, checked top-down.
# Same 20/40/60/80 thresholds as the factor coloring in the dashboard.
CLASSIFICATION_BANDS = (
    (80, Classification.EXCELLENT),
    (60, Classification.GOOD),
    (40, Classification.FAIR),
    (20, Classification.POOR),
)


def calculate_health_score(factors: ScoreFactors) -> int:
    """
    Combine factors into a 0-100 integer score.

    Scoring weights:
    - 30%: Liquidity (months of reserve)
    - 25%: Savings rate
    - 20%: Spending trend
    - 25%: Future risk (projected shortfall)

    Halves round up so that 79.5 lands in Excellent, not Good.
    """
    weighted = (
        FACTOR_WEIGHTS["liquidity"] * factors.liquidity
        + FACTOR_WEIGHTS["savings_rate"] * factors.savings_rate
        + FACTOR_WEIGHTS["trend"] * factors.trend
        + FACTOR_WEIGHTS["future_risk"] * factors.future_risk
    )
    score = math.floor(weighted + 0.5)
    return max(0, min(int(score), 100))


def classify_score(score: int) -> Classification:
    """Map score to band: >=80 Excellent, 60-79 Good, 40-59 Fair, 20-39 Poor, <20 Critical"""
    for lower_bound, classification in CLASSIFICATION_BANDS:
        if score >= lower_bound:
            return classification
    return Classification.CRITICAL
