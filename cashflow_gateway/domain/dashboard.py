"""Dashboard assembly - run the aggregation pipeline for one view of one year"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from cashflow_gateway.domain.aggregation import summarize_year
from cashflow_gateway.domain.categories import collect_category_totals, project_category_rows
from cashflow_gateway.domain.comparison import build_trend_points, compare_previous_period, december_totals
from cashflow_gateway.domain.models import (
    BudgetProgress,
    CategoryTotalRow,
    LedgerSnapshot,
    MonthSummary,
    PeriodTotals,
    PreviousPeriod,
    TrendChange,
    TrendPoint,
    WaterfallStep,
    ZERO,
)
from cashflow_gateway.domain.periods import ViewMode, period_label, resolve_period
from cashflow_gateway.domain.totals import period_months, reduce_period
from cashflow_gateway.domain.trends import percentage_change

KPI_METRICS = ("income", "expenses", "investments", "net")
FILL_CAP = Decimal("150")
HUNDRED = Decimal("100")
ONE = Decimal("1")


@dataclass
class DashboardQuery:
    """View selection for one dashboard request"""

    year: int
    view: ViewMode = ViewMode.MONTH
    month: Optional[int] = None
    month_from: int = 1
    month_to: int = 12
    hide_empty: bool = False


@dataclass
class Dashboard:
    """Everything the presentation layer needs for one period"""

    year: int
    view: ViewMode
    label: str
    currency: str
    scope: List[int]
    months: List[MonthSummary]
    period_months: List[MonthSummary]
    totals: PeriodTotals
    previous: PreviousPeriod
    kpi_trends: Dict[str, Optional[TrendChange]]
    trend_points: List[TrendPoint]
    category_rows: List[CategoryTotalRow]
    progress: List[BudgetProgress] = field(default_factory=list)
    waterfall: List[WaterfallStep] = field(default_factory=list)


def budget_progress(metric: str, plan: Decimal, actual: Decimal) -> BudgetProgress:
    """
    Progress of an actual against its plan.

    Rules:
    - net: fill relative to the larger of |actual|, |plan| and 1; never off target
    - no plan (<= 0): full bar when anything happened; any expense is off target
    - otherwise actual / plan, capped at 150%; income and investment are off target
      below plan, expenses above it
    """
    if metric == "net":
        ceiling = max(abs(actual), abs(plan), ONE) if actual < 0 else max(actual, plan, ONE)
        return BudgetProgress(metric, plan, actual, abs(actual) / ceiling * HUNDRED, False)

    is_expense = metric == "expenses"

    if plan <= 0:
        fill = HUNDRED if actual > 0 else ZERO
        return BudgetProgress(metric, plan, actual, fill, is_expense and actual > 0)

    fill = min(FILL_CAP, actual / plan * HUNDRED)
    off_target = actual > plan if is_expense else actual < plan
    return BudgetProgress(metric, plan, actual, fill, off_target)


def cashflow_waterfall(totals: PeriodTotals) -> List[WaterfallStep]:
    """Start balance, income up, expenses and investments down, end balance"""
    after_income = totals.starting_balance + totals.income
    after_expenses = after_income - totals.expenses

    return [
        WaterfallStep("Start", ZERO, totals.starting_balance),
        WaterfallStep("Income", totals.starting_balance, totals.income),
        WaterfallStep("Expenses", after_income, -totals.expenses),
        WaterfallStep("Investments", after_expenses, -totals.investments),
        WaterfallStep("End", ZERO, totals.ending_balance),
    ]


def build_dashboard(snapshot: LedgerSnapshot, query: DashboardQuery, today: Optional[date] = None) -> Dashboard:
    """
    Main entry point: turn a ledger snapshot into dashboard metrics.

    Flow:
    1. Resolve the months in scope
    2. Summarize all 12 months (running balance always covers the whole year)
    3. Reduce the summaries over the scope
    4. Compare against the equal-length previous period
    5. Project per-category rows and the trend chart
    """
    view = ViewMode.parse(query.view)
    month = query.month if query.month is not None else (today or date.today()).month
    scope = resolve_period(view, month, query.month_from, query.month_to)

    initial_balance = snapshot.settings.initial_balance
    current = snapshot.current

    months = summarize_year(current.actuals, current.budgets, initial_balance)
    totals = reduce_period(months, scope, initial_balance)
    previous = compare_previous_period(scope, snapshot.year, current, snapshot.previous, view)

    kpi_trends = {
        metric: percentage_change(getattr(totals, metric), getattr(previous.totals, metric))
        for metric in KPI_METRICS
    }

    trend_points: List[TrendPoint] = []
    if view != ViewMode.MONTH and len(scope) > 1:
        trend_points = build_trend_points(months, scope, december_totals(snapshot.previous))

    category_totals = collect_category_totals(current.actuals, current.budgets, scope)
    category_rows = project_category_rows(
        snapshot.categories,
        category_totals,
        previous.actual_by_category,
        hide_empty=query.hide_empty,
    )

    progress = [
        budget_progress(metric, getattr(totals, f"budget_{metric}"), getattr(totals, metric))
        for metric in KPI_METRICS
    ]

    return Dashboard(
        year=snapshot.year,
        view=view,
        label=period_label(view, snapshot.year, month, query.month_from, query.month_to),
        currency=snapshot.settings.currency,
        scope=scope,
        months=months,
        period_months=period_months(months, scope),
        totals=totals,
        previous=previous,
        kpi_trends=kpi_trends,
        trend_points=trend_points,
        category_rows=category_rows,
        progress=progress,
        waterfall=cashflow_waterfall(totals),
    )
