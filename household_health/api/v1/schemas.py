"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from household_health.domain.models import (
    AccountSnapshot,
    AccountType,
    Classification,
    DebtRecord,
    Impact,
    Severity,
    TransactionRecord,
    TransactionType,
)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


# Request


class AccountSchema(CamelModel):
    id: str = Field(..., min_length=1)
    type: AccountType
    balance: float
    credit_limit: Optional[float] = Field(None, ge=0)

    def to_domain(self) -> AccountSnapshot:
        return AccountSnapshot(id=self.id, type=self.type, balance=self.balance, credit_limit=self.credit_limit)


class TransactionSchema(CamelModel):
    date: date
    type: TransactionType
    amount: float = Field(..., ge=0, description="Always positive; direction comes from type")
    account_id: str

    def to_domain(self) -> TransactionRecord:
        return TransactionRecord(date=self.date, type=self.type, amount=self.amount, account_id=self.account_id)


class DebtSchema(CamelModel):
    current_balance: float = Field(..., ge=0)
    is_paid_off: bool = False

    def to_domain(self) -> DebtRecord:
        return DebtRecord(current_balance=self.current_balance, is_paid_off=self.is_paid_off)


class HealthScoreRequest(CamelModel):
    """Request body for POST /v1/health/score"""

    accounts: List[AccountSchema] = Field(default_factory=list)
    transactions: List[TransactionSchema] = Field(default_factory=list)
    debts: List[DebtSchema] = Field(default_factory=list)
    as_of: Optional[date] = Field(None, description="Assessment date, defaults to today")


# Response


class ScoreFactorsSchema(CamelModel):
    liquidity: float
    savings_rate: float
    trend: float
    future_risk: float


class FutureProjectionMonthSchema(CamelModel):
    month: str
    projected_income: float
    projected_expenses: float
    projected_balance: float


class FutureProjectionSchema(CamelModel):
    months: List[FutureProjectionMonthSchema]
    will_go_negative: bool
    months_until_negative: Optional[int] = None


class HealthAlertSchema(CamelModel):
    id: str
    severity: Severity
    title: str
    description: str
    action: str


class HealthSuggestionSchema(CamelModel):
    id: str
    impact: Impact
    title: str
    description: str


class HealthScoreResponse(CamelModel):
    """Response for POST /v1/health/score"""

    score: int = Field(..., ge=0, le=100)
    classification: Classification
    total_balance: float
    months_of_reserve: float
    savings_rate: float
    spending_trend: float
    factors: ScoreFactorsSchema
    future_projection: FutureProjectionSchema
    alerts: List[HealthAlertSchema]
    suggestions: List[HealthSuggestionSchema]
