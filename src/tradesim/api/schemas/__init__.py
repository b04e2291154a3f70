"""Pydantic schemas for API request/response."""

from tradesim.api.schemas.commands import CommandRequest, CommandResponse
from tradesim.api.schemas.users import (
    AccountResponse,
    HoldingValuationResponse,
    PortfolioResponse,
    TransactionResponse,
    TransactionListResponse,
    StatsResponse,
    TradeRequest,
    TradeResponse,
    WatchlistAddRequest,
    WatchlistResponse,
)
from tradesim.api.schemas.quotes import (
    QuoteResponse,
    CompanyOverviewResponse,
    SymbolMatchResponse,
    SearchResponse,
    PriceBarResponse,
    SeriesResponse,
)

__all__ = [
    "CommandRequest",
    "CommandResponse",
    "AccountResponse",
    "HoldingValuationResponse",
    "PortfolioResponse",
    "TransactionResponse",
    "TransactionListResponse",
    "StatsResponse",
    "TradeRequest",
    "TradeResponse",
    "WatchlistAddRequest",
    "WatchlistResponse",
    "QuoteResponse",
    "CompanyOverviewResponse",
    "SymbolMatchResponse",
    "SearchResponse",
    "PriceBarResponse",
    "SeriesResponse",
]
