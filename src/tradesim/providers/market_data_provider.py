"""Market data provider protocol."""

from typing import Protocol

from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar

# Interval understood by every provider for the daily series
DAILY_INTERVAL = "daily"
INTRADAY_INTERVALS = ("1min", "5min", "15min", "30min", "60min")


class MarketDataProvider(Protocol):
    """
    Protocol for external market data sources.

    Every method makes at most one outbound attempt and raises a
    QuoteUnavailableError subclass on failure:
    RateLimitedError, SymbolNotFoundError or QuoteTransportError.
    """

    def get_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote (price, change, change percent, volume)."""
        ...

    def get_overview(self, symbol: str) -> CompanyOverview:
        """Fetch company fundamentals."""
        ...

    def search(self, keywords: str) -> list[SymbolMatch]:
        """Search symbols by ticker or company name."""
        ...

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        """Fetch a daily or intraday price series, oldest bar first."""
        ...
