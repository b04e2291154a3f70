"""View models for market data returned by providers."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Quote:
    """
    Market quote for a symbol.

    A quote served from the fresh price cache carries only the price;
    change, change_percent and volume are None and cached is True.
    """

    symbol: str
    price: Decimal
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    volume: Optional[int] = None
    as_of: Optional[datetime] = None
    cached: bool = False


@dataclass
class CompanyOverview:
    """Company fundamentals."""

    symbol: str
    name: str
    sector: Optional[str] = None
    industry: Optional[str] = None
    market_cap: Optional[str] = None
    pe_ratio: Optional[str] = None
    description: Optional[str] = None


@dataclass
class SymbolMatch:
    """Single result of a symbol search."""

    symbol: str
    name: str
    type: str = ""
    region: str = ""


@dataclass
class PriceBar:
    """OHLCV bar of a daily or intraday series."""

    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int = 0
