"""Trend calculations - percentage change and whether it is good news"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from cashflow_gateway.domain.models import CategoryType, TrendChange

NEW = "new"
HUNDRED = Decimal("100")


def percentage_change(
    current: Decimal,
    previous: Optional[Decimal],
    precision: int = 0,
) -> Optional[TrendChange]:
    """
    Percentage change from previous to current.

    Edge-case policy:
    - previous 0 (or absent), current 0  -> None, nothing to display
    - previous 0 (or absent), current != 0 -> "new", growth rate is undefined
    - otherwise (current - previous) / |previous| * 100, labelled "0%" when exactly
      zero and with an explicit "+" when non-negative

    Args:
        current: Value for the current period
        previous: Value for the comparison period
        precision: Decimal places in the label (0 for KPI cards, 1 for chart tooltips)

    Example:
        percentage_change(Decimal(110), Decimal(100)) -> TrendChange("+10%", Decimal(10))
    """
    if previous is None or previous == 0:
        return None if current == 0 else TrendChange(label=NEW)

    pct = (current - previous) / abs(previous) * HUNDRED
    if pct == 0:
        return TrendChange(label="0%", value=pct)

    rounded = pct.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    sign = "+" if pct >= 0 else ""
    return TrendChange(label=f"{sign}{rounded}%", value=pct)


def trend_sort_value(change: Optional[TrendChange]) -> Decimal:
    """Numeric stand-in for sorting: absent is 0, "new" ranks as +100%"""
    if change is None:
        return Decimal(0)
    if change.is_new:
        return HUNDRED
    return change.value


def is_favorable(metric: Union[str, CategoryType], current: Decimal, previous: Optional[Decimal]) -> Optional[bool]:
    """
    Whether moving from previous to current is good for the given metric.

    - income / investment: an increase is good
    - expense: a decrease is good
    - net: good when it stays non-negative and grows, or when a negative net
      moves toward zero

    Returns None when there is nothing to compare or no change.
    """
    if previous is None or current == previous:
        return None

    kind = metric.value if isinstance(metric, CategoryType) else metric.upper()
    if kind in ("INCOME", "INVESTMENT", "INVESTMENTS"):
        return current > previous
    if kind in ("EXPENSE", "EXPENSES"):
        return current < previous
    if kind == "NET":
        if current >= 0:
            return current > previous
        return previous < 0 and abs(current) < abs(previous)
    return None
