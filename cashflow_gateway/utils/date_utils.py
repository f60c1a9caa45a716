"""Month arithmetic utilities"""

from calendar import month_abbr
from typing import List, Tuple

MONTHS_IN_YEAR = 12


def month_range(start: int, end: int) -> List[int]:
    """Months from start to end (inclusive), dropping anything outside 1..12"""
    return [m for m in range(start, end + 1) if 1 <= m <= MONTHS_IN_YEAR]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, rolling over year boundaries"""
    index = year * MONTHS_IN_YEAR + (month - 1) + delta
    return index // MONTHS_IN_YEAR, index % MONTHS_IN_YEAR + 1


def month_label(month: int) -> str:
    """Short English month name, e.g. 3 -> 'Mar'"""
    return month_abbr[month]
