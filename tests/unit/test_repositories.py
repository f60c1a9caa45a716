"""Unit tests for the database-backed ledger reader"""

import pytest
from decimal import Decimal
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from cashflow_gateway.domain.exceptions import LedgerUnavailableError
from cashflow_gateway.domain.models import CategoryType
from cashflow_gateway.infrastructure.database.models import (
    BudgetEntryRecord,
    CategoryRecord,
    MonthlyEntryRecord,
    SettingsRecord,
)
from cashflow_gateway.infrastructure.database.repositories import SqlLedgerReader


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """Two categories (one inactive) with entries in 2023 and 2024"""
    db.add_all(
        [
            CategoryRecord(id=1, name="Salary", type="INCOME", sort_order=2),
            CategoryRecord(id=2, name="Rent", type="EXPENSE", sort_order=1),
            CategoryRecord(id=3, name="Old gym", type="EXPENSE", sort_order=0, is_active=False),
        ]
    )
    db.flush()
    db.add_all(
        [
            MonthlyEntryRecord(year=2024, month=2, category_id=1, amount=Decimal("5000.00")),
            MonthlyEntryRecord(year=2024, month=1, category_id=2, amount=Decimal("1500.50")),
            MonthlyEntryRecord(year=2023, month=12, category_id=1, amount=Decimal("4000.00")),
            BudgetEntryRecord(year=2024, month=1, category_id=2, amount=Decimal("1400.00")),
        ]
    )
    db.commit()
    return db


async def test_fetch_year_tags_entries_with_category_type(seeded_db: Session):
    ledger = await SqlLedgerReader(seeded_db).fetch_year(2024)

    assert ledger.year == 2024
    assert [(e.month, e.category_id) for e in ledger.actuals] == [(1, 2), (2, 1)]
    assert ledger.actuals[0].amount == Decimal("1500.50")
    assert ledger.actuals[0].category_type == CategoryType.EXPENSE
    assert ledger.actuals[1].category_type == CategoryType.INCOME
    assert len(ledger.budgets) == 1
    assert ledger.budgets[0].amount == Decimal("1400.00")


async def test_fetch_year_without_entries_is_empty(seeded_db: Session):
    ledger = await SqlLedgerReader(seeded_db).fetch_year(2019)

    assert ledger.actuals == []
    assert ledger.budgets == []


async def test_fetch_categories_active_only_in_sort_order(seeded_db: Session):
    reader = SqlLedgerReader(seeded_db)

    active = await reader.fetch_categories(active_only=True)
    everything = await reader.fetch_categories(active_only=False)

    assert [c.name for c in active] == ["Rent", "Salary"]
    assert [c.name for c in everything] == ["Old gym", "Rent", "Salary"]


async def test_fetch_settings_defaults_when_row_missing(db: Session):
    ledger_settings = await SqlLedgerReader(db).fetch_settings()

    assert ledger_settings.initial_balance == 0
    assert ledger_settings.currency == "USD"


async def test_fetch_settings_reads_singleton(db: Session):
    db.add(SettingsRecord(id=1, initial_balance=Decimal("2500.75"), currency="EUR"))
    db.commit()

    ledger_settings = await SqlLedgerReader(db).fetch_settings()

    assert ledger_settings.initial_balance == Decimal("2500.75")
    assert ledger_settings.currency == "EUR"


async def test_database_errors_become_ledger_unavailable():
    """Test SQLAlchemy failures surface as LedgerUnavailableError"""
    broken = MagicMock(spec=Session)
    broken.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    with pytest.raises(LedgerUnavailableError):
        await SqlLedgerReader(broken).fetch_year(2024)
