"""Domain models - pure Python dataclasses representing household finances"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class AccountType(str, Enum):
    CASH = "cash"
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"
    OTHER = "other"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Classification(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    CRITICAL = "Critical"


# Inputs (owned by the data-access layer, read-only here)


@dataclass(frozen=True)
class AccountSnapshot:
    """Current balance of one household account"""

    id: str
    type: AccountType
    balance: float
    credit_limit: Optional[float] = None


@dataclass(frozen=True)
class TransactionRecord:
    """Single ledger entry inside the lookback window"""

    date: date
    type: TransactionType
    amount: float  # always positive; direction comes from type
    account_id: str


@dataclass(frozen=True)
class DebtRecord:
    """Outstanding loan or debt tracked outside of the account list"""

    current_balance: float
    is_paid_off: bool = False


# Derived


@dataclass(frozen=True)
class MonthlyAggregate:
    """Income and expense totals for one calendar month"""

    month: date  # first day of the month
    income: float
    expenses: float

    @property
    def net_flow(self) -> float:
        return self.income - self.expenses


@dataclass(frozen=True)
class Aggregates:
    """Aggregator output consumed by every downstream stage"""

    total_balance: float
    total_assets: float
    total_liabilities: float
    monthly_series: List[MonthlyAggregate]
    current_month_income: float
    current_month_expenses: float
    avg_monthly_income: float
    avg_monthly_expenses: float
    credit_utilization: Optional[float] = None


@dataclass(frozen=True)
class ScoreFactors:
    """Four independent 0-100 factor scores (higher is healthier)"""

    liquidity: float
    savings_rate: float
    trend: float
    future_risk: float


@dataclass(frozen=True)
class FutureProjectionMonth:
    month: str
    projected_income: float
    projected_expenses: float
    projected_balance: float


@dataclass(frozen=True)
class FutureProjection:
    """Forward balance projection over the forecast horizon"""

    months: List[FutureProjectionMonth]
    will_go_negative: bool
    months_until_negative: Optional[int] = None  # 1-based index into months


@dataclass(frozen=True)
class HealthAlert:
    id: str
    severity: Severity
    title: str
    description: str
    action: str


@dataclass(frozen=True)
class HealthSuggestion:
    id: str
    impact: Impact
    title: str
    description: str


@dataclass(frozen=True)
class FinancialHealthResult:
    """Output of a health assessment"""

    score: int
    classification: Classification
    total_balance: float
    months_of_reserve: float
    savings_rate: float
    spending_trend: float
    factors: ScoreFactors
    future_projection: FutureProjection
    alerts: List[HealthAlert] = field(default_factory=list)
    suggestions: List[HealthSuggestion] = field(default_factory=list)
