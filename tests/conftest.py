"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.api.main import create_app
from cashflow_gateway.domain.models import (
    BudgetEntry,
    Category,
    CategoryType,
    LedgerEntry,
    LedgerSettings,
    LedgerSnapshot,
    YearLedger,
)
from cashflow_gateway.infrastructure.database.models import Base
from cashflow_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SALARY = Category(id=1, name="Salary", type=CategoryType.INCOME, sort_order=1)
RENT = Category(id=2, name="Rent", type=CategoryType.EXPENSE, sort_order=2)
GROCERIES = Category(id=3, name="Groceries", type=CategoryType.EXPENSE, sort_order=3)
INDEX_FUND = Category(id=4, name="Index fund", type=CategoryType.INVESTMENT, sort_order=4)
CATEGORIES = [SALARY, RENT, GROCERIES, INDEX_FUND]


def actual(year: int, month: int, category: Category, amount: str) -> LedgerEntry:
    """Actual entry for a category, amount given as a decimal string"""
    return LedgerEntry(year, month, category.id, Decimal(amount), category.type)


def plan(year: int, month: int, category: Category, amount: str) -> BudgetEntry:
    """Budget entry for a category, amount given as a decimal string"""
    return BudgetEntry(year, month, category.id, Decimal(amount), category.type)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def household_snapshot() -> LedgerSnapshot:
    """
    A year of household data: salary, rent and groceries every month of 2024,
    an investment in even months, and a 2023 December to compare January with.
    """
    actuals = []
    budgets = []
    for month in range(1, 13):
        actuals.append(actual(2024, month, SALARY, "5000.00"))
        actuals.append(actual(2024, month, RENT, "1500.00"))
        actuals.append(actual(2024, month, GROCERIES, "412.35"))
        if month % 2 == 0:
            actuals.append(actual(2024, month, INDEX_FUND, "500.00"))
        budgets.append(plan(2024, month, SALARY, "5000.00"))
        budgets.append(plan(2024, month, RENT, "1500.00"))
        budgets.append(plan(2024, month, GROCERIES, "400.00"))

    previous = YearLedger(
        year=2023,
        actuals=[
            actual(2023, 12, SALARY, "4000.00"),
            actual(2023, 12, RENT, "1500.00"),
            actual(2023, 11, SALARY, "4000.00"),
        ],
    )

    return LedgerSnapshot(
        year=2024,
        current=YearLedger(year=2024, actuals=actuals, budgets=budgets),
        previous=previous,
        categories=CATEGORIES,
        settings=LedgerSettings(initial_balance=Decimal("1000.00"), currency="USD"),
    )
