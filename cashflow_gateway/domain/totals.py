"""Period totals - reduce monthly summaries over the months in scope"""

from decimal import Decimal
from typing import List
from cashflow_gateway.domain.models import MonthSummary, PeriodTotals


def period_months(months: List[MonthSummary], scope: List[int]) -> List[MonthSummary]:
    """Monthly summaries for the months in scope, in month order"""
    in_scope = set(scope)
    return [m for m in months if m.month in in_scope]


def reduce_period(
    months: List[MonthSummary],
    scope: List[int],
    initial_balance: Decimal,
) -> PeriodTotals:
    """
    Sum the monthly summaries over the months in scope.

    Balances are read from the already computed running balance, never recomputed:
    - starting_balance: running balance of the month before the first month in scope,
      initial_balance when the period starts in January or is empty
    - ending_balance: running balance of the last month in scope, initial_balance
      when the period is empty
    """
    selected = period_months(months, scope)
    totals = PeriodTotals(starting_balance=initial_balance, ending_balance=initial_balance)

    for m in selected:
        totals.income += m.income
        totals.expenses += m.expenses
        totals.investments += m.investments
        totals.net += m.net
        totals.budget_income += m.budget_income
        totals.budget_expenses += m.budget_expenses
        totals.budget_investments += m.budget_investments
        totals.budget_net += m.budget_net

    if not selected:
        return totals

    totals.ending_balance = selected[-1].running_balance

    by_month = {m.month: m for m in months}
    preceding = by_month.get(selected[0].month - 1)
    if preceding is not None:
        totals.starting_balance = preceding.running_balance

    return totals
