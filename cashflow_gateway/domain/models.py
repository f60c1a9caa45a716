"""Domain models - pure Python dataclasses representing ledger data and derived metrics"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

ZERO = Decimal("0")


class CategoryType(str, Enum):
    """Bucket a category's amounts roll up into"""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    INVESTMENT = "INVESTMENT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Category:
    """Ledger category, owned by category management"""

    id: int
    name: str
    type: CategoryType
    is_active: bool = True
    sort_order: int = 0


@dataclass(frozen=True)
class LedgerEntry:
    """Actual amount for one category in one month"""

    year: int
    month: int
    category_id: int
    amount: Decimal
    category_type: CategoryType


@dataclass(frozen=True)
class BudgetEntry:
    """Planned amount for one category in one month"""

    year: int
    month: int
    category_id: int
    amount: Decimal
    category_type: CategoryType


@dataclass(frozen=True)
class LedgerSettings:
    """Balance at the start of the year and display currency"""

    initial_balance: Decimal = ZERO
    currency: str = "USD"


@dataclass
class YearLedger:
    """Everything the ledger holds for one year"""

    year: int
    actuals: List[LedgerEntry] = field(default_factory=list)
    budgets: List[BudgetEntry] = field(default_factory=list)


@dataclass
class LedgerSnapshot:
    """Consistent set of reads a dashboard computation runs on"""

    year: int
    current: YearLedger
    previous: YearLedger
    categories: List[Category]
    settings: LedgerSettings


@dataclass
class MonthSummary:
    """Per-month totals and running balance"""

    month: int
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    investments: Decimal = ZERO
    net: Decimal = ZERO
    running_balance: Decimal = ZERO
    budget_income: Decimal = ZERO
    budget_expenses: Decimal = ZERO
    budget_investments: Decimal = ZERO
    budget_net: Decimal = ZERO


@dataclass
class PeriodTotals:
    """Sums over the months in scope plus the balances bracketing them"""

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    investments: Decimal = ZERO
    net: Decimal = ZERO
    budget_income: Decimal = ZERO
    budget_expenses: Decimal = ZERO
    budget_investments: Decimal = ZERO
    budget_net: Decimal = ZERO
    starting_balance: Decimal = ZERO
    ending_balance: Decimal = ZERO


@dataclass
class TypeTotals:
    """Actual totals per category-type bucket"""

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    investments: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses - self.investments

    def add(self, category_type: CategoryType, amount: Decimal) -> None:
        """Fold an amount into its bucket; OTHER has no bucket"""
        if category_type == CategoryType.INCOME:
            self.income += amount
        elif category_type == CategoryType.EXPENSE:
            self.expenses += amount
        elif category_type == CategoryType.INVESTMENT:
            self.investments += amount


@dataclass
class PreviousPeriod:
    """Actuals for the equal-length period right before the current one"""

    months: List[tuple[int, int]]  # (year, month), chronological
    totals: TypeTotals
    actual_by_category: Dict[int, Decimal]


@dataclass
class CategoryTotals:
    """Period actual and plan sums keyed by category id"""

    actual: Dict[int, Decimal] = field(default_factory=dict)
    plan: Dict[int, Decimal] = field(default_factory=dict)

    def actual_for(self, category_id: int) -> Decimal:
        return self.actual.get(category_id, ZERO)

    def plan_for(self, category_id: int) -> Decimal:
        return self.plan.get(category_id, ZERO)


@dataclass(frozen=True)
class TrendChange:
    """
    Percentage change between two values.

    `value` is the unrounded percentage, None for the "new" sentinel.
    """

    label: str
    value: Optional[Decimal] = None

    @property
    def is_new(self) -> bool:
        return self.value is None


@dataclass
class CategoryTotalRow:
    """Display row for one category over the period"""

    category_id: int
    name: str
    type: CategoryType
    plan: Decimal
    actual: Decimal
    previous_actual: Decimal

    @property
    def difference(self) -> Decimal:
        return self.actual - self.plan


@dataclass
class TrendPoint:
    """One month on the trend chart with the preceding month's values"""

    month: int
    income: Decimal
    expenses: Decimal
    investments: Decimal
    net: Decimal
    prev_income: Optional[Decimal]
    prev_expenses: Optional[Decimal]
    prev_investments: Optional[Decimal]
    prev_net: Optional[Decimal]


@dataclass
class BudgetProgress:
    """Actual vs plan for one KPI"""

    metric: str
    plan: Decimal
    actual: Decimal
    fill_pct: Decimal
    off_target: bool  # expense above plan, income or investment below it

    @property
    def variance(self) -> Decimal:
        return self.actual - self.plan

    @property
    def display_pct(self) -> Decimal:
        return min(Decimal("100"), self.fill_pct)


@dataclass
class WaterfallStep:
    """Bar of the cashflow waterfall: visible segment starts at `base`"""

    name: str
    base: Decimal
    value: Decimal
