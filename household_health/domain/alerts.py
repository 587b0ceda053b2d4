"""Alert engine - rule table of severity-tagged risk alerts"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from household_health.domain.models import Aggregates, FutureProjection, HealthAlert, Severity
from household_health.utils.formatting import format_money, pluralize

SEVERITY_ORDER = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}

CREDIT_UTILIZATION_LIMIT = 0.30
RESERVE_TARGET_MONTHS = 3
RISING_EXPENSES_THRESHOLD = 25.0
LOW_SAVINGS_RATE_THRESHOLD = 10.0


@dataclass(frozen=True)
class AssessmentContext:
    """Everything the rule tables may look at"""

    aggregates: Aggregates
    months_of_reserve: float
    savings_rate: float
    spending_trend: float
    projection: FutureProjection

    @property
    def months_until_negative(self) -> Optional[int]:
        return self.projection.months_until_negative


@dataclass(frozen=True)
class AlertRule:
    id: str
    severity: Severity
    title: str
    action: str
    predicate: Callable[[AssessmentContext], bool]
    describe: Callable[[AssessmentContext], str]


def _shortfall_within(ctx: AssessmentContext, low: int, high: int) -> bool:
    return ctx.projection.will_go_negative and low <= ctx.months_until_negative <= high


def _describe_shortfall(ctx: AssessmentContext) -> str:
    months = ctx.months_until_negative
    balance = ctx.projection.months[months - 1].projected_balance
    return (
        f"At your current pace your balance reaches {format_money(balance)} "
        f"in {months} {pluralize(months, 'month')}."
    )


def _describe_month_overspend(ctx: AssessmentContext) -> str:
    income = ctx.aggregates.current_month_income
    expenses = ctx.aggregates.current_month_expenses
    if income <= 0:
        return f"This month you spent {format_money(expenses)} with no income recorded."
    return f"This month you spent {(expenses / income - 1) * 100:.1f}% more than you earned."


ALERT_RULES: List[AlertRule] = [
    AlertRule(
        id="negative_balance",
        severity=Severity.CRITICAL,
        title="Negative balance",
        action="Prioritize paying down balances owed and pause non-essential spending.",
        predicate=lambda ctx: ctx.aggregates.total_balance < 0,
        describe=lambda ctx: (
            f"Your combined balance is negative by {format_money(abs(ctx.aggregates.total_balance))}."
        ),
    ),
    AlertRule(
        id="low_emergency_reserve",
        severity=Severity.CRITICAL,
        title="Low emergency reserve",
        action="Build an emergency reserve covering at least 3 months of expenses.",
        predicate=lambda ctx: ctx.months_of_reserve < 1,
        describe=lambda ctx: (
            f"Your balance covers about {max(ctx.months_of_reserve, 0) * 30:.0f} days of expenses. "
            "The recommended reserve is 3 to 6 months."
        ),
    ),
    AlertRule(
        id="projected_shortfall",
        severity=Severity.CRITICAL,
        title="Projected shortfall",
        action="Cut expenses or add income before the shortfall month.",
        predicate=lambda ctx: _shortfall_within(ctx, 1, 2),
        describe=_describe_shortfall,
    ),
    AlertRule(
        id="spending_exceeds_income",
        severity=Severity.WARNING,
        title="Spending more than earning",
        action="Create a strict budget and reduce non-essential spending.",
        predicate=lambda ctx: ctx.savings_rate < 0,
        describe=lambda ctx: (
            f"On average you spend {abs(ctx.savings_rate):.1f}% more than you earn each month."
        ),
    ),
    AlertRule(
        id="expenses_exceeding_income",
        severity=Severity.WARNING,
        title="Expenses exceeding income this month",
        action="Review this month's expenses and identify where you can cut costs.",
        predicate=lambda ctx: (
            ctx.aggregates.current_month_expenses > ctx.aggregates.current_month_income
        ),
        describe=_describe_month_overspend,
    ),
    AlertRule(
        id="rising_expenses",
        severity=Severity.WARNING,
        title="Rising expenses",
        action="Review recent expenses and identify categories that can be reduced.",
        predicate=lambda ctx: ctx.spending_trend > RISING_EXPENSES_THRESHOLD,
        describe=lambda ctx: (
            f"Your expenses last month were {ctx.spending_trend:.1f}% above your recent average."
        ),
    ),
    AlertRule(
        id="shortfall_on_horizon",
        severity=Severity.WARNING,
        title="Shortfall on the horizon",
        action="Adjust your budget now to keep your balance positive.",
        predicate=lambda ctx: _shortfall_within(ctx, 3, 3),
        describe=_describe_shortfall,
    ),
    AlertRule(
        id="high_credit_utilization",
        severity=Severity.WARNING,
        title="High credit utilization",
        action="Pay credit balances down below 30% of your limits.",
        predicate=lambda ctx: (
            ctx.aggregates.credit_utilization is not None
            and ctx.aggregates.credit_utilization > CREDIT_UTILIZATION_LIMIT
        ),
        describe=lambda ctx: (
            f"You are using {ctx.aggregates.credit_utilization * 100:.0f}% of your available credit."
        ),
    ),
    AlertRule(
        id="reserve_below_target",
        severity=Severity.INFO,
        title="Reserve below target",
        action="Keep saving until your reserve covers 3 to 6 months of expenses.",
        predicate=lambda ctx: 1 <= ctx.months_of_reserve < RESERVE_TARGET_MONTHS,
        describe=lambda ctx: (
            f"Your reserve covers {ctx.months_of_reserve:.1f} "
            f"{pluralize(round(ctx.months_of_reserve, 1), 'month')} of expenses."
        ),
    ),
    AlertRule(
        id="low_savings_rate",
        severity=Severity.INFO,
        title="Low savings rate",
        action="Aim to save at least 20% of your income.",
        predicate=lambda ctx: 0 < ctx.savings_rate < LOW_SAVINGS_RATE_THRESHOLD,
        describe=lambda ctx: f"You are saving {ctx.savings_rate:.1f}% of your income.",
    ),
]


def identify_alerts(ctx: AssessmentContext, rules: List[AlertRule] = ALERT_RULES) -> List[HealthAlert]:
    """
    Evaluate every rule independently; each match emits one alert.

    Alerts are ranked by severity, table order within a severity.
    """
    alerts = [
        HealthAlert(
            id=rule.id,
            severity=rule.severity,
            title=rule.title,
            description=rule.describe(ctx),
            action=rule.action,
        )
        for rule in rules
        if rule.predicate(ctx)
    ]
    return sorted(alerts, key=lambda alert: SEVERITY_ORDER[alert.severity])
