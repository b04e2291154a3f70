"""Market data service: cached prices and pass-through lookups."""

import logging
from decimal import Decimal

from tradesim.core.exceptions import QuoteUnavailableError
from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.providers.market_data_provider import MarketDataProvider, DAILY_INTERVAL
from tradesim.services.quote_cache import QuoteCache

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching market data.

    Wraps a provider with the shared QuoteCache. Single-symbol lookups
    surface provider failures to the caller; batch price lookups degrade to
    the last cached price instead.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: QuoteCache,
    ):
        self._provider = provider
        self._cache = cache

    def get_quote(self, symbol: str) -> Quote:
        """
        Quote for one symbol.

        A fresh cached price is returned as a price-only Quote with
        cached=True. Otherwise the provider is asked once and its price is
        cached. Failures propagate.
        """
        symbol = symbol.upper()
        cached = self._cache.get(symbol)
        if cached is not None:
            return Quote(symbol=symbol, price=cached, cached=True)

        quote = self._provider.get_quote(symbol)
        self._cache.put(symbol, quote.price)
        return quote

    def current_price(self, symbol: str) -> Decimal:
        """Current price for one symbol; raises QuoteUnavailableError on failure."""
        return self.get_quote(symbol).price

    def current_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        """
        Prices for several symbols.

        A symbol whose lookup fails falls back to its last cached price, fresh
        or stale. Symbols with neither are omitted from the result.
        """
        prices: dict[str, Decimal] = {}
        for symbol in dict.fromkeys(s.upper() for s in symbols):
            try:
                prices[symbol] = self.current_price(symbol)
            except QuoteUnavailableError as e:
                fallback = self._cache.peek(symbol)
                if fallback is not None:
                    logger.warning("Using stale price for %s (%s)", symbol, e.reason.value)
                    prices[symbol] = fallback
                else:
                    logger.warning("No price available for %s: %s", symbol, e.message)
        return prices

    def company_overview(self, symbol: str) -> CompanyOverview:
        """Company fundamentals (not cached)."""
        return self._provider.get_overview(symbol.upper())

    def search(self, keywords: str) -> list[SymbolMatch]:
        """Search symbols by ticker or name (not cached)."""
        return self._provider.search(keywords.strip())

    def series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        """Daily or intraday price series (not cached)."""
        return self._provider.get_series(symbol.upper(), interval)
