"""Pydantic schemas for account, portfolio and watchlist endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from tradesim.domain.models import TradeSide
from tradesim.services.accounting import AMOUNT_PLACES


class AccountResponse(BaseModel):
    """Response schema for a user account."""

    model_config = {"from_attributes": True}

    user_id: str
    cash_balance: Decimal
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    total_trades: int
    profitable_trades: int
    registered_at: Optional[datetime] = None
    last_activity_at: Optional[datetime] = None


class HoldingValuationResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    quantity: Decimal
    avg_cost: Decimal
    total_invested: Decimal
    current_price: Decimal
    current_value: Decimal
    unrealized_pl: Decimal
    unrealized_pl_percent: Optional[Decimal] = None


class PortfolioResponse(BaseModel):
    """Holdings valued at current prices plus cash."""

    user_id: str
    cash_balance: Decimal
    holdings: list[HoldingValuationResponse]
    total_value: Decimal
    total_invested: Decimal
    total_unrealized_pl: Decimal
    total_unrealized_pl_percent: Optional[Decimal] = None
    unpriced_symbols: list[str] = []
    as_of: Optional[datetime] = None


class TransactionResponse(BaseModel):
    """Response schema for a single trade."""

    model_config = {"from_attributes": True}

    txn_id: Optional[int] = None
    symbol: str
    side: TradeSide
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    profit_loss: Optional[Decimal] = None
    timestamp: datetime


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    count: int


class StatsResponse(BaseModel):
    model_config = {"from_attributes": True}

    user_id: str
    cash_balance: Decimal
    total_trades: int
    profitable_trades: int
    win_rate: Decimal
    registered_at: Optional[datetime] = None


class TradeRequest(BaseModel):
    """Request schema for a trade at the current market price."""

    side: TradeSide
    symbol: str = Field(..., min_length=1, max_length=10)
    quantity: Decimal = Field(
        ..., gt=0, decimal_places=AMOUNT_PLACES, description="Number of shares, may be fractional"
    )


class TradeResponse(BaseModel):
    transaction: TransactionResponse
    cash_balance: Decimal


class WatchlistAddRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=10)


class WatchlistResponse(BaseModel):
    symbols: list[str]
    added: Optional[bool] = None
