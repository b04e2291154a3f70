"""Pydantic schemas for market data endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    price: Decimal
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    volume: Optional[int] = None
    as_of: Optional[datetime] = None
    cached: bool = False


class CompanyOverviewResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    sector: Optional[str] = None
    industry: Optional[str] = None
    market_cap: Optional[str] = None
    pe_ratio: Optional[str] = None
    description: Optional[str] = None


class SymbolMatchResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    type: str = ""
    region: str = ""


class SearchResponse(BaseModel):
    keywords: str
    matches: list[SymbolMatchResponse]


class PriceBarResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int = 0


class SeriesResponse(BaseModel):
    """Daily or intraday series, oldest bar first."""

    symbol: str
    interval: str
    bars: list[PriceBarResponse]
