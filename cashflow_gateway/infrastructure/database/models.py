"""SQLAlchemy ORM models for categories, monthly entries, budgets and settings"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CategoryRecord(Base):
    """Income, expense, investment or other category"""

    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)  # INCOME | EXPENSE | INVESTMENT | OTHER
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class MonthlyEntryRecord(Base):
    """Actual amount for a category in a month"""

    __tablename__ = "monthly_entry"
    __table_args__ = (UniqueConstraint("year", "month", "category_id", name="uq_monthly_entry_period"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False, index=True)
    month = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("category.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)

    category = relationship("CategoryRecord", lazy="joined")


class BudgetEntryRecord(Base):
    """Planned amount for a category in a month"""

    __tablename__ = "budget_entry"
    __table_args__ = (UniqueConstraint("year", "month", "category_id", name="uq_budget_entry_period"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False, index=True)
    month = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("category.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)

    category = relationship("CategoryRecord", lazy="joined")


class SettingsRecord(Base):
    """Singleton row (id=1) with the opening balance and currency"""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    initial_balance = Column(Numeric(14, 2), nullable=False, default=0)
    currency = Column(Text, nullable=False, default="USD")
