"""Monthly aggregation - per-month totals and running cash balance for a year"""

from decimal import Decimal
from typing import Dict, Iterable, List, Union
from cashflow_gateway.domain.models import BudgetEntry, LedgerEntry, MonthSummary, TypeTotals
from cashflow_gateway.utils.date_utils import MONTHS_IN_YEAR

Entry = Union[LedgerEntry, BudgetEntry]


def totals_by_month(entries: Iterable[Entry]) -> Dict[int, TypeTotals]:
    """Partition entries by month and sum each month per category type"""
    by_month: Dict[int, TypeTotals] = {m: TypeTotals() for m in range(1, MONTHS_IN_YEAR + 1)}
    for entry in entries:
        bucket = by_month.get(entry.month)
        if bucket is None:
            continue  # month outside 1..12
        bucket.add(entry.category_type, entry.amount)
    return by_month


def summarize_year(
    actuals: Iterable[LedgerEntry],
    budgets: Iterable[BudgetEntry],
    initial_balance: Decimal,
) -> List[MonthSummary]:
    """
    Build the 12 MonthSummary records for a year.

    Requirements:
    - Always 12 records, January first, zero-filled when a month has no entries
    - net = income - expenses - investments (same for the budget side)
    - Running balance is a left fold over months 1..12 seeded with initial_balance;
      month m holds the balance after adding its net
    """
    actual_totals = totals_by_month(actuals)
    budget_totals = totals_by_month(budgets)

    summaries = []
    running_balance = initial_balance

    for month in range(1, MONTHS_IN_YEAR + 1):
        actual = actual_totals[month]
        budget = budget_totals[month]

        net = actual.net
        running_balance += net

        summaries.append(
            MonthSummary(
                month=month,
                income=actual.income,
                expenses=actual.expenses,
                investments=actual.investments,
                net=net,
                running_balance=running_balance,
                budget_income=budget.income,
                budget_expenses=budget.expenses,
                budget_investments=budget.investments,
                budget_net=budget.net,
            )
        )

    return summaries
