"""Pydantic schemas for API responses"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional


class ORMSchema(BaseModel):
    """Schemas built straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class MonthSummarySchema(ORMSchema):
    """Totals and running balance for one month"""

    month: int
    income: Decimal
    expenses: Decimal
    investments: Decimal
    net: Decimal
    running_balance: Decimal
    budget_income: Decimal
    budget_expenses: Decimal
    budget_investments: Decimal
    budget_net: Decimal


class PeriodTotalsSchema(ORMSchema):
    income: Decimal
    expenses: Decimal
    investments: Decimal
    net: Decimal
    budget_income: Decimal
    budget_expenses: Decimal
    budget_investments: Decimal
    budget_net: Decimal
    starting_balance: Decimal
    ending_balance: Decimal


class TrendSchema(ORMSchema):
    label: str
    value: Optional[Decimal] = None


class PreviousPeriodSchema(BaseModel):
    """Equal-length period before the selected one"""

    months: List[str]  # "YYYY-MM"
    income: Decimal
    expenses: Decimal
    investments: Decimal
    net: Decimal


class TrendPointSchema(ORMSchema):
    month: int
    income: Decimal
    expenses: Decimal
    investments: Decimal
    net: Decimal
    prev_income: Optional[Decimal] = None
    prev_expenses: Optional[Decimal] = None
    prev_investments: Optional[Decimal] = None
    prev_net: Optional[Decimal] = None


class CategoryRowSchema(BaseModel):
    """Per-category plan vs actual with derived difference and trend"""

    category_id: int
    name: str
    type: str
    plan: Decimal
    actual: Decimal
    previous_actual: Decimal
    difference: Decimal
    trend: Optional[TrendSchema] = None
    favorable: Optional[bool] = None


class BudgetProgressSchema(ORMSchema):
    metric: str
    plan: Decimal
    actual: Decimal
    variance: Decimal
    fill_pct: Decimal
    display_pct: Decimal
    off_target: bool


class WaterfallStepSchema(ORMSchema):
    name: str
    base: Decimal
    value: Decimal


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    year: int
    view: str
    label: str
    currency: str
    months_in_scope: List[int]
    months: List[MonthSummarySchema]
    totals: PeriodTotalsSchema
    previous_period: PreviousPeriodSchema
    trends: Dict[str, Optional[TrendSchema]]
    trend_points: List[TrendPointSchema]
    category_rows: List[CategoryRowSchema]
    progress: List[BudgetProgressSchema]
    waterfall: List[WaterfallStepSchema]


class YearSummaryResponse(BaseModel):
    """Response for GET /v1/summary/{year}"""

    year: int
    currency: str
    initial_balance: Decimal
    months: List[MonthSummarySchema]
