"""Unit tests for category totals, filtering, sorting and grouping"""

from decimal import Decimal
import pytest
from cashflow_gateway.domain.categories import (
    collect_category_totals,
    group_category_rows,
    project_category_rows,
    sort_category_rows,
)
from cashflow_gateway.domain.models import CategoryTotals, CategoryType
from conftest import CATEGORIES, GROCERIES, INDEX_FUND, RENT, SALARY, actual, plan


def test_collect_category_totals_only_counts_months_in_scope():
    actuals = [
        actual(2024, 1, SALARY, "5000"),
        actual(2024, 2, SALARY, "5100"),
        actual(2024, 3, SALARY, "9999"),
        actual(2024, 2, RENT, "1500"),
    ]
    budgets = [plan(2024, 1, RENT, "1500"), plan(2024, 2, RENT, "1500"), plan(2024, 5, RENT, "1")]

    totals = collect_category_totals(actuals, budgets, [1, 2])

    assert totals.actual_for(SALARY.id) == Decimal("10100")
    assert totals.actual_for(RENT.id) == Decimal("1500")
    assert totals.plan_for(RENT.id) == Decimal("3000")
    assert totals.actual_for(GROCERIES.id) == 0
    assert totals.plan_for(SALARY.id) == 0


def test_hide_empty_filter_is_actual_driven():
    """Test zero actual is hidden despite a plan; any actual is kept despite no plan"""
    totals = CategoryTotals(
        actual={SALARY.id: Decimal("1")},
        plan={RENT.id: Decimal("2000")},
    )

    rows = project_category_rows(CATEGORIES, totals, {}, hide_empty=True)

    assert [r.category_id for r in rows] == [SALARY.id]
    assert rows[0].plan == 0
    assert rows[0].actual == Decimal("1")


def test_hide_empty_keeps_negative_actuals():
    """Test only an exactly-zero actual hides a category"""
    totals = CategoryTotals(actual={GROCERIES.id: Decimal("-25")})

    rows = project_category_rows(CATEGORIES, totals, {}, hide_empty=True)

    assert [r.category_id for r in rows] == [GROCERIES.id]


def test_project_rows_without_filter_keeps_all_categories_in_order():
    totals = CategoryTotals(actual={RENT.id: Decimal("1500")}, plan={RENT.id: Decimal("1400")})
    previous = {RENT.id: Decimal("1450"), 99: Decimal("5")}

    rows = project_category_rows(CATEGORIES, totals, previous)

    assert [r.name for r in rows] == ["Salary", "Rent", "Groceries", "Index fund"]
    rent = rows[1]
    assert rent.previous_actual == Decimal("1450")
    assert rent.difference == Decimal("100")
    assert rows[0].previous_actual == 0


def _rows():
    totals = CategoryTotals(
        actual={SALARY.id: Decimal("5000"), RENT.id: Decimal("1500"), GROCERIES.id: Decimal("1500"), INDEX_FUND.id: Decimal("0")},
        plan={SALARY.id: Decimal("4000"), RENT.id: Decimal("1500"), GROCERIES.id: Decimal("1000"), INDEX_FUND.id: Decimal("600")},
    )
    previous = {SALARY.id: Decimal("5000"), RENT.id: Decimal("1000"), INDEX_FUND.id: Decimal("300")}
    return project_category_rows(CATEGORIES, totals, previous)


def test_sort_by_actual_descending_breaks_ties_by_name():
    rows = sort_category_rows(_rows(), "actual", descending=True)
    assert [r.name for r in rows] == ["Salary", "Groceries", "Rent", "Index fund"]


def test_sort_by_difference_ascending():
    rows = sort_category_rows(_rows(), "difference", descending=False)
    assert [r.name for r in rows] == ["Index fund", "Rent", "Groceries", "Salary"]


def test_sort_by_trend_ranks_new_as_hundred_percent():
    """Test trend sort: Groceries new (+100), Rent +50, Salary 0, Index fund -100"""
    rows = sort_category_rows(_rows(), "trend")
    assert [r.name for r in rows] == ["Groceries", "Rent", "Salary", "Index fund"]


def test_sort_rejects_unknown_key():
    with pytest.raises(ValueError):
        sort_category_rows(_rows(), "name")


def test_group_category_rows_in_type_order():
    groups = group_category_rows(list(reversed(_rows())))

    assert [t for t, _ in groups] == [CategoryType.INCOME, CategoryType.EXPENSE, CategoryType.INVESTMENT]
    assert [r.name for r in groups[1][1]] == ["Groceries", "Rent"]
