"""Category totals - per-category plan/actual rows for the selected period"""

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple
from cashflow_gateway.domain.models import (
    BudgetEntry,
    Category,
    CategoryTotalRow,
    CategoryTotals,
    CategoryType,
    LedgerEntry,
    ZERO,
)
from cashflow_gateway.domain.trends import percentage_change, trend_sort_value

GROUP_ORDER = (CategoryType.INCOME, CategoryType.EXPENSE, CategoryType.INVESTMENT)
SORT_KEYS = ("plan", "actual", "difference", "trend")


def collect_category_totals(
    actuals: Iterable[LedgerEntry],
    budgets: Iterable[BudgetEntry],
    scope: List[int],
) -> CategoryTotals:
    """Sum actual and plan amounts per category over the months in scope, in one pass each"""
    in_scope = set(scope)
    totals = CategoryTotals()

    for entry in actuals:
        if entry.month in in_scope:
            totals.actual[entry.category_id] = totals.actual_for(entry.category_id) + entry.amount

    for entry in budgets:
        if entry.month in in_scope:
            totals.plan[entry.category_id] = totals.plan_for(entry.category_id) + entry.amount

    return totals


def project_category_rows(
    categories: Iterable[Category],
    totals: CategoryTotals,
    previous_by_category: Dict[int, Decimal],
    hide_empty: bool = False,
) -> List[CategoryTotalRow]:
    """
    One row per category, in the order categories are given.

    With hide_empty, a category is dropped only when its period actual is exactly
    zero; a planned amount alone does not keep it visible.
    """
    rows = []
    for category in categories:
        actual = totals.actual_for(category.id)
        if hide_empty and actual == 0:
            continue

        rows.append(
            CategoryTotalRow(
                category_id=category.id,
                name=category.name,
                type=category.type,
                plan=totals.plan_for(category.id),
                actual=actual,
                previous_actual=previous_by_category.get(category.id, ZERO),
            )
        )
    return rows


def sort_category_rows(
    rows: List[CategoryTotalRow],
    key: str = "actual",
    descending: bool = True,
) -> List[CategoryTotalRow]:
    """Sort rows by plan, actual, difference or trend, ties broken by name (always A-Z)"""
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}")

    def value(row: CategoryTotalRow) -> Decimal:
        if key == "trend":
            return trend_sort_value(percentage_change(row.actual, row.previous_actual))
        return getattr(row, key)

    by_name = sorted(rows, key=lambda r: r.name.lower())
    return sorted(by_name, key=value, reverse=descending)


def group_category_rows(rows: List[CategoryTotalRow]) -> List[Tuple[CategoryType, List[CategoryTotalRow]]]:
    """Rows grouped Income, Expense, Investment; empty groups and OTHER are left out"""
    groups = []
    for category_type in GROUP_ORDER:
        members = [r for r in rows if r.type == category_type]
        if members:
            groups.append((category_type, members))
    return groups
