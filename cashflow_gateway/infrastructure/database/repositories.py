"""Data access layer - database-backed ledger reader"""

from decimal import Decimal
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from cashflow_gateway.config import settings
from cashflow_gateway.domain.exceptions import InvalidLedgerDataError, LedgerUnavailableError
from cashflow_gateway.domain.models import (
    BudgetEntry,
    Category,
    CategoryType,
    LedgerEntry,
    LedgerSettings,
    YearLedger,
)
from cashflow_gateway.infrastructure.database.models import (
    BudgetEntryRecord,
    CategoryRecord,
    MonthlyEntryRecord,
    SettingsRecord,
)

SETTINGS_ID = 1


class SqlLedgerReader:
    """Ledger reader over the categories, entries and settings tables"""

    source = "database"

    def __init__(self, db: Session):
        self.db = db

    async def fetch_year(self, year: int) -> YearLedger:
        """Actual and budget entries for a year, each tagged with its category type"""
        try:
            actuals = (
                self.db.query(MonthlyEntryRecord)
                .filter(MonthlyEntryRecord.year == year)
                .order_by(MonthlyEntryRecord.month, MonthlyEntryRecord.category_id)
                .all()
            )
            budgets = (
                self.db.query(BudgetEntryRecord)
                .filter(BudgetEntryRecord.year == year)
                .order_by(BudgetEntryRecord.month, BudgetEntryRecord.category_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise LedgerUnavailableError(f"Could not read ledger for {year}: {e}") from e

        return YearLedger(
            year=year,
            actuals=[LedgerEntry(**self._entry_fields(row)) for row in actuals],
            budgets=[BudgetEntry(**self._entry_fields(row)) for row in budgets],
        )

    async def fetch_categories(self, active_only: bool = True) -> List[Category]:
        """Categories in display order"""
        try:
            query = self.db.query(CategoryRecord)
            if active_only:
                query = query.filter(CategoryRecord.is_active.is_(True))
            rows = query.order_by(CategoryRecord.sort_order, CategoryRecord.id).all()
        except SQLAlchemyError as e:
            raise LedgerUnavailableError(f"Could not read categories: {e}") from e

        return [
            Category(
                id=row.id,
                name=row.name,
                type=_category_type(row.type),
                is_active=row.is_active,
                sort_order=row.sort_order,
            )
            for row in rows
        ]

    async def fetch_settings(self) -> LedgerSettings:
        """Opening balance and currency, defaults when the settings row does not exist yet"""
        try:
            row = self.db.get(SettingsRecord, SETTINGS_ID)
        except SQLAlchemyError as e:
            raise LedgerUnavailableError(f"Could not read settings: {e}") from e

        if row is None:
            return LedgerSettings(initial_balance=Decimal("0"), currency=settings.default_currency)

        return LedgerSettings(
            initial_balance=Decimal(str(row.initial_balance)),
            currency=row.currency or settings.default_currency,
        )

    @staticmethod
    def _entry_fields(row) -> dict:
        return {
            "year": row.year,
            "month": row.month,
            "category_id": row.category_id,
            "amount": Decimal(str(row.amount)),
            "category_type": _category_type(row.category.type),
        }


def _category_type(value: str) -> CategoryType:
    try:
        return CategoryType(value.upper())
    except (AttributeError, ValueError) as e:
        raise InvalidLedgerDataError(f"Unknown category type: {value!r}") from e
