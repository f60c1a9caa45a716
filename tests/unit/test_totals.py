"""Unit tests for period totals"""

from decimal import Decimal
from cashflow_gateway.domain.aggregation import summarize_year
from cashflow_gateway.domain.periods import resolve_period
from cashflow_gateway.domain.totals import period_months, reduce_period
from conftest import INDEX_FUND, RENT, SALARY, actual, plan


def _january_only_year():
    entries = [
        actual(2024, 1, SALARY, "5000"),
        actual(2024, 1, RENT, "2000"),
        actual(2024, 1, INDEX_FUND, "500"),
    ]
    return summarize_year(entries, [plan(2024, 2, RENT, "1800")], Decimal("1000"))


def test_reduce_period_january_february_range():
    """Test totals and balances for range(1, 2)"""
    months = _january_only_year()
    totals = reduce_period(months, resolve_period("range", month_from=1, month_to=2), Decimal("1000"))

    assert totals.income == Decimal("5000")
    assert totals.expenses == Decimal("2000")
    assert totals.investments == Decimal("500")
    assert totals.net == Decimal("2500")
    assert totals.budget_expenses == Decimal("1800")
    assert totals.budget_net == Decimal("-1800")
    assert totals.starting_balance == Decimal("1000")
    assert totals.ending_balance == Decimal("3500")


def test_reduce_period_starting_balance_from_preceding_month():
    """Test a period starting in March opens with February's running balance"""
    entries = [actual(2024, m, SALARY, "100") for m in range(1, 13)]
    months = summarize_year(entries, [], Decimal("50"))

    totals = reduce_period(months, [3, 4, 5], Decimal("50"))

    assert totals.starting_balance == Decimal("250")
    assert totals.ending_balance == Decimal("550")
    assert totals.income == Decimal("300")


def test_reduce_period_empty_scope():
    """Test empty scope gives zero totals and the initial balance on both ends"""
    totals = reduce_period(_january_only_year(), [], Decimal("1000"))

    assert totals.income == totals.expenses == totals.net == 0
    assert totals.starting_balance == Decimal("1000")
    assert totals.ending_balance == Decimal("1000")


def test_reduce_period_uses_precomputed_balance():
    """Test balances come from MonthSummary, not from re-adding nets"""
    months = _january_only_year()
    months[4].running_balance = Decimal("-42")  # tampered on purpose

    totals = reduce_period(months, [5], Decimal("1000"))

    assert totals.ending_balance == Decimal("-42")


def test_period_months_filters_in_month_order():
    months = _january_only_year()
    assert [m.month for m in period_months(months, [7, 3])] == [3, 7]
