"""Period selection - resolve a dashboard view into the months it covers"""

from datetime import date
from enum import Enum
from typing import List, Optional, Tuple, Union
from cashflow_gateway.utils.date_utils import MONTHS_IN_YEAR, month_label, month_range, shift_month


class ViewMode(str, Enum):
    """How the dashboard scopes a year"""

    FULL = "full"
    MONTH = "month"
    YTD = "ytd"
    RANGE = "range"

    @classmethod
    def parse(cls, value: Union[str, "ViewMode", None]) -> "ViewMode":
        """Unknown or missing views fall back to a single month"""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MONTH


def resolve_period(
    view: Union[str, ViewMode, None],
    month: Optional[int] = None,
    month_from: Optional[int] = None,
    month_to: Optional[int] = None,
    today: Optional[date] = None,
) -> List[int]:
    """
    Resolve a view into an ordered, de-duplicated list of months in 1..12.

    Rules:
    - full:  1..12
    - month: the given month
    - ytd:   1..month
    - range: min(from, to)..max(from, to), bound order is irrelevant

    Missing month defaults to the current month, missing range bounds to 1 and 12.
    Out-of-range months are dropped rather than rejected, so the result may be empty.
    """
    mode = ViewMode.parse(view)
    if month is None:
        month = (today or date.today()).month

    if mode == ViewMode.FULL:
        return month_range(1, MONTHS_IN_YEAR)
    if mode == ViewMode.MONTH:
        return month_range(month, month)
    if mode == ViewMode.YTD:
        return month_range(1, month)

    low = 1 if month_from is None else month_from
    high = MONTHS_IN_YEAR if month_to is None else month_to
    return month_range(min(low, high), max(low, high))


def previous_period_months(
    scope: List[int],
    year: int,
    view: Union[str, ViewMode, None] = None,
) -> List[Tuple[int, int]]:
    """
    The len(scope) months immediately before the first month in scope.

    Walks backward one month at a time from scope[0], wrapping into the previous
    year below January. Each step is prepended so the result stays chronological.

    Year-to-date views always start in January, so they compare against the same
    months of the prior year (Jan-Mar 2024 vs Jan-Mar 2023).
    """
    if not scope:
        return []

    if view is not None and ViewMode.parse(view) == ViewMode.YTD:
        return [(year - 1, month) for month in scope]

    months: List[Tuple[int, int]] = []
    for offset in range(1, len(scope) + 1):
        months.insert(0, shift_month(year, scope[0], -offset))
    return months


def period_label(
    view: Union[str, ViewMode, None],
    year: int,
    month: int,
    month_from: int = 1,
    month_to: int = MONTHS_IN_YEAR,
) -> str:
    """Human-readable description of the selected period"""
    mode = ViewMode.parse(view)
    if mode == ViewMode.FULL:
        return f"{year} full year"
    if mode == ViewMode.MONTH:
        return f"{_label(month)} {year}"
    if mode == ViewMode.YTD:
        return f"{year} YTD (Jan - {_label(month)})"
    low, high = sorted((month_from, month_to))
    return f"{_label(low)} - {_label(high)} {year}"


def _label(month: int) -> str:
    return month_label(month) if 1 <= month <= MONTHS_IN_YEAR else str(month)
