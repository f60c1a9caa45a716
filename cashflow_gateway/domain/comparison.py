"""Previous-period comparison - actuals for the period right before the current one"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Union
from cashflow_gateway.domain.aggregation import totals_by_month
from cashflow_gateway.domain.models import MonthSummary, PreviousPeriod, TrendPoint, TypeTotals, YearLedger
from cashflow_gateway.domain.periods import ViewMode, previous_period_months
from cashflow_gateway.utils.date_utils import MONTHS_IN_YEAR


def compare_previous_period(
    scope: List[int],
    year: int,
    current: YearLedger,
    previous: YearLedger,
    view: Union[str, ViewMode, None] = None,
) -> PreviousPeriod:
    """
    Totals for the equal-length period immediately preceding the current one.

    The previous period can straddle a year boundary, so each (year, month) pulls
    entries from whichever ledger it belongs to. A missing prior year simply
    contributes nothing.
    """
    months = previous_period_months(scope, year, view)
    wanted = set(months)

    totals = TypeTotals()
    actual_by_category: Dict[int, Decimal] = defaultdict(Decimal)

    for ledger in (previous, current):
        for entry in ledger.actuals:
            if (ledger.year, entry.month) not in wanted:
                continue
            totals.add(entry.category_type, entry.amount)
            actual_by_category[entry.category_id] += entry.amount

    return PreviousPeriod(months=months, totals=totals, actual_by_category=dict(actual_by_category))


def december_totals(previous: YearLedger) -> TypeTotals:
    """Prior-year December totals, the "previous month" of a January trend point"""
    return totals_by_month(previous.actuals)[MONTHS_IN_YEAR]


def build_trend_points(
    months: List[MonthSummary],
    scope: List[int],
    prior_december: TypeTotals,
) -> List[TrendPoint]:
    """
    One point per month in scope with the preceding calendar month's values.

    January compares against prior_december; every other month against the month
    before it in the same year.
    """
    by_month = {m.month: m for m in months}
    points = []

    for month in scope:
        summary = by_month[month]
        prev = prior_december if month == 1 else by_month.get(month - 1)

        points.append(
            TrendPoint(
                month=month,
                income=summary.income,
                expenses=summary.expenses,
                investments=summary.investments,
                net=summary.net,
                prev_income=prev.income if prev is not None else None,
                prev_expenses=prev.expenses if prev is not None else None,
                prev_investments=prev.investments if prev is not None else None,
                prev_net=prev.net if prev is not None else None,
            )
        )

    return points
