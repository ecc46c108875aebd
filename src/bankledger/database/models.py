"""SQLAlchemy models for bankledger database."""

from datetime import datetime, UTC
from typing import Any, Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Money columns; values come back as Decimal.
Money = Numeric(14, 2)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Bank account model.

    ``current_balance`` is a cached running total; it is only changed through
    the balance mutator.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    initial_balance = Column(Money, nullable=False, default=0)
    current_balance = Column(Money, nullable=False, default=0)
    start_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("owner_user_id", "name", name="uq_account_owner_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="bank")


class Category(Base):
    """Chart-of-accounts category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, nullable=False, index=True)
    description = Column(String, nullable=False)
    dre_range = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    charts_of_accounts = relationship("ChartOfAccount", back_populates="category")


class ChartOfAccount(Base):
    """Chart of account (plan) model."""

    __tablename__ = "chart_of_accounts"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, nullable=False, index=True)
    description = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("owner_user_id", "description", name="uq_chart_owner_description"),
    )

    # Relationships
    category = relationship("Category", back_populates="charts_of_accounts")
    transactions = relationship("Transaction", back_populates="chart_of_account")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, nullable=False)
    bank_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    chart_of_account_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=False)
    type = Column(String(16), nullable=False)
    value = Column(Money, nullable=False)
    due_date = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (Index("ix_transactions_owner_bank", "owner_user_id", "bank_id"),)

    # Relationships
    bank = relationship("Account", back_populates="transactions")
    chart_of_account = relationship("ChartOfAccount", back_populates="transactions")


class Transfer(Base):
    """Transfer model: one row, two balance legs."""

    __tablename__ = "transfers"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, nullable=False, index=True)
    from_bank_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    to_bank_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    value = Column(Money, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    from_bank = relationship("Account", foreign_keys=[from_bank_id])
    to_bank = relationship("Account", foreign_keys=[to_bank_id])


def create_session_factory(
    database_url: str, connect_args: Optional[dict[str, Any]] = None
) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False, connect_args=connect_args or {})
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
