"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from tradesim.repositories.sqlalchemy.database import Base
from tradesim.domain.models.enums import TradeSide


class UserAccountORM(Base):
    """SQLAlchemy model for UserAccount."""

    __tablename__ = "user_accounts"

    user_id = Column(String(64), primary_key=True)
    username = Column(String(255), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    cash_balance = Column(Numeric(precision=18, scale=8), nullable=False)
    total_trades = Column(Integer, nullable=False, default=0)
    profitable_trades = Column(Integer, nullable=False, default=0)
    registered_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_activity_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    holdings = relationship("HoldingORM", back_populates="account")
    transactions = relationship("TradeTransactionORM", back_populates="account")


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_holdings_user_symbol"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("user_accounts.user_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    avg_cost = Column(Numeric(precision=18, scale=8), nullable=False)
    total_invested = Column(Numeric(precision=18, scale=8), nullable=False)
    opened_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    account = relationship("UserAccountORM", back_populates="holdings")


class TradeTransactionORM(Base):
    """SQLAlchemy model for TradeTransaction (append-only)."""

    __tablename__ = "trade_transactions"

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("user_accounts.user_id"), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    side = Column(SqlEnum(TradeSide), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    price = Column(Numeric(precision=18, scale=8), nullable=False)
    total_amount = Column(Numeric(precision=18, scale=8), nullable=False)
    profit_loss = Column(Numeric(precision=18, scale=8), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    account = relationship("UserAccountORM", back_populates="transactions")


class WatchlistEntryORM(Base):
    """SQLAlchemy model for WatchlistEntry."""

    __tablename__ = "watchlist_entries"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("user_accounts.user_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    added_at = Column(DateTime, nullable=False, default=datetime.utcnow)


def to_decimal(value) -> Decimal:
    """Normalize a Numeric column value to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
