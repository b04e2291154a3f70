"""Services module."""

from tradesim.services.quote_cache import QuoteCache, CachedPrice
from tradesim.services.market_data_service import MarketDataService
from tradesim.services.ledger_service import LedgerService, TradeResult
from tradesim.services.watchlist_service import WatchlistService
from tradesim.services.analysis_service import AnalysisService

__all__ = [
    "QuoteCache",
    "CachedPrice",
    "MarketDataService",
    "LedgerService",
    "TradeResult",
    "WatchlistService",
    "AnalysisService",
]
