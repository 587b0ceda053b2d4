"""Suggestion engine - one impact-tagged improvement per factor below 100"""

from dataclasses import dataclass
from typing import Callable, List

from household_health.domain.alerts import AssessmentContext
from household_health.domain.models import HealthSuggestion, Impact, ScoreFactors
from household_health.utils.formatting import format_money

IMPACT_ORDER = {Impact.HIGH: 0, Impact.MEDIUM: 1, Impact.LOW: 2}

HIGH_IMPACT_BELOW = 40.0
LOW_IMPACT_ABOVE = 70.0


@dataclass(frozen=True)
class SuggestionRule:
    id: str
    factor: str  # attribute name on ScoreFactors
    title: str
    describe: Callable[[AssessmentContext], str]


def _describe_budget_adjustment(ctx: AssessmentContext) -> str:
    gap = ctx.aggregates.avg_monthly_expenses - ctx.aggregates.avg_monthly_income
    if ctx.projection.will_go_negative and gap > 0:
        return (
            f"Reduce expenses by {format_money(gap)} per month to keep your "
            "projected balance above zero."
        )
    return "Keep a buffer above your projected low point so one-off costs don't push you negative."


SUGGESTION_RULES: List[SuggestionRule] = [
    SuggestionRule(
        id="build_emergency_fund",
        factor="liquidity",
        title="Build your emergency reserve",
        describe=lambda ctx: (
            f"Set aside {format_money(ctx.aggregates.avg_monthly_expenses * 3)} "
            "to cover 3 months of expenses, then grow it toward 6 months."
        ),
    ),
    SuggestionRule(
        id="increase_savings_rate",
        factor="savings_rate",
        title="Increase your savings rate",
        describe=lambda ctx: (
            f"Saving 20% of your income means putting away "
            f"{format_money(ctx.aggregates.avg_monthly_income * 0.2)} per month. "
            "Automating transfers on payday makes it stick."
        ),
    ),
    SuggestionRule(
        id="review_spending",
        factor="trend",
        title="Review recent expenses",
        describe=lambda ctx: (
            "Look through your expense categories for costs that grew recently "
            "and trim the ones that don't affect your quality of life."
        ),
    ),
    SuggestionRule(
        id="adjust_budget",
        factor="future_risk",
        title="Adjust your budget",
        describe=_describe_budget_adjustment,
    ),
]


def impact_for(factor_score: float) -> Impact:
    """Bigger factor deficit, bigger impact: <40 high, 40-70 medium, >70 low"""
    if factor_score < HIGH_IMPACT_BELOW:
        return Impact.HIGH
    if factor_score <= LOW_IMPACT_ABOVE:
        return Impact.MEDIUM
    return Impact.LOW


def generate_suggestions(
    ctx: AssessmentContext,
    factors: ScoreFactors,
    rules: List[SuggestionRule] = SUGGESTION_RULES,
) -> List[HealthSuggestion]:
    """At most one suggestion per factor, only for factors below 100, ranked by impact"""
    suggestions = []
    seen_factors = set()
    for rule in rules:
        if rule.factor in seen_factors:
            continue
        score = getattr(factors, rule.factor)
        if score >= 100:
            continue
        seen_factors.add(rule.factor)
        suggestions.append(
            HealthSuggestion(
                id=rule.id,
                impact=impact_for(score),
                title=rule.title,
                description=rule.describe(ctx),
            )
        )
    return sorted(suggestions, key=lambda s: IMPACT_ORDER[s.impact])
