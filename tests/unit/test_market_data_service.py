"""
Unit tests for MarketDataService.

Tests cover:
- Cache hits avoid provider calls
- Single-symbol failures propagate
- Batch lookups fall back to stale prices
- Pass-through lookups
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from tradesim.core.exceptions import (
    QuoteTransportError,
    QuoteUnavailableError,
    RateLimitedError,
    SymbolNotFoundError,
)
from tradesim.providers import AlphaVantageProvider
from tradesim.services import MarketDataService


class TestGetQuote:
    def test_first_lookup_calls_provider_and_caches(
        self, market_data_service, deterministic_provider, quote_cache
    ):
        """
        GIVEN an empty cache
        WHEN a quote is requested
        THEN the provider is called once and the price is cached
        """
        quote = market_data_service.get_quote("AAPL")

        assert quote.price == Decimal("150.00")
        assert quote.cached is False
        assert quote.change == Decimal("1.50")
        assert deterministic_provider.count("quote") == 1
        assert quote_cache.get("AAPL") == Decimal("150.00")

    def test_cache_hit_within_window_skips_provider(
        self, market_data_service, deterministic_provider, fake_clock
    ):
        """
        GIVEN a price fetched 30 seconds ago
        WHEN the price is requested again
        THEN it comes from the cache without a provider call
        """
        market_data_service.current_price("AAPL")
        fake_clock.advance(30)
        deterministic_provider.set_price("AAPL", Decimal("155.00"))

        quote = market_data_service.get_quote("AAPL")

        assert quote.price == Decimal("150.00")
        assert quote.cached is True
        assert quote.change is None
        assert deterministic_provider.count("quote") == 1

    def test_stale_cache_triggers_new_request(
        self, market_data_service, deterministic_provider, fake_clock
    ):
        market_data_service.current_price("AAPL")
        fake_clock.advance(61)
        deterministic_provider.set_price("AAPL", Decimal("155.00"))

        assert market_data_service.current_price("AAPL") == Decimal("155.00")
        assert deterministic_provider.count("quote") == 2

    def test_symbol_is_uppercased(self, market_data_service, deterministic_provider):
        assert market_data_service.current_price("aapl") == Decimal("150.00")
        assert deterministic_provider.calls == [("quote", "AAPL")]

    def test_single_lookup_propagates_failure_even_with_stale_cache(
        self, market_data_service, deterministic_provider, fake_clock
    ):
        """
        GIVEN a stale cached price for AAPL
        WHEN the provider fails
        THEN the single-symbol lookup raises instead of using the stale price
        """
        market_data_service.current_price("AAPL")
        fake_clock.advance(120)
        deterministic_provider.failure = QuoteTransportError("AAPL", "timeout")

        with pytest.raises(QuoteTransportError):
            market_data_service.current_price("AAPL")

    def test_rate_limit_is_structured(self, market_data_service, deterministic_provider):
        deterministic_provider.failure = RateLimitedError("AAPL", "quota")

        with pytest.raises(QuoteUnavailableError) as exc_info:
            market_data_service.get_quote("AAPL")

        assert exc_info.value.reason.value == "RATE_LIMITED"

    def test_unknown_symbol_raises_not_found(self, market_data_service):
        with pytest.raises(SymbolNotFoundError):
            market_data_service.get_quote("ZZZZ")


class TestCurrentPrices:
    def test_batch_returns_prices_for_all_symbols(self, market_data_service):
        prices = market_data_service.current_prices(["AAPL", "MSFT"])

        assert prices == {"AAPL": Decimal("150.00"), "MSFT": Decimal("380.00")}

    def test_batch_deduplicates_symbols(self, market_data_service, deterministic_provider):
        market_data_service.current_prices(["AAPL", "aapl", "AAPL"])

        assert deterministic_provider.count("quote") == 1

    def test_batch_falls_back_to_stale_price(
        self, market_data_service, deterministic_provider, fake_clock
    ):
        """
        GIVEN AAPL cached long ago and the provider now failing
        WHEN prices are fetched in batch
        THEN the stale AAPL price is used
        """
        market_data_service.current_price("AAPL")
        fake_clock.advance(3600)
        deterministic_provider.failure = QuoteTransportError("AAPL", "down")

        prices = market_data_service.current_prices(["AAPL"])

        assert prices == {"AAPL": Decimal("150.00")}

    def test_batch_falls_back_when_provider_reports_nan_price(self, quote_cache, fake_clock):
        """
        GIVEN a stale AAPL price and an upstream answer with a NaN price
        WHEN prices are fetched in batch
        THEN the malformed answer counts as a failure and the stale price is used
        """
        session = MagicMock(spec=requests.Session)
        session.get.return_value.json.return_value = {
            "Global Quote": {"01. symbol": "AAPL", "05. price": "NaN"}
        }
        provider = AlphaVantageProvider(api_key="test-key", session=session)
        service = MarketDataService(provider=provider, cache=quote_cache)
        quote_cache.put("AAPL", Decimal("150.00"))
        fake_clock.advance(3600)

        prices = service.current_prices(["AAPL"])

        assert prices == {"AAPL": Decimal("150.00")}
        assert session.get.call_count == 1

    def test_batch_omits_symbols_without_any_price(self, quote_cache, fake_clock, failing_provider):
        service = MarketDataService(provider=failing_provider, cache=quote_cache)
        quote_cache.put("AAPL", Decimal("150.00"))
        fake_clock.advance(3600)

        prices = service.current_prices(["AAPL", "MSFT"])

        assert prices == {"AAPL": Decimal("150.00")}


class TestPassThrough:
    def test_overview_is_not_cached(self, market_data_service, deterministic_provider):
        market_data_service.company_overview("AAPL")
        market_data_service.company_overview("AAPL")

        assert deterministic_provider.count("overview") == 2

    def test_search(self, market_data_service):
        matches = market_data_service.search("  micro ")

        assert [m.symbol for m in matches] == ["MSFT"]

    def test_series_default_interval_is_daily(self, market_data_service):
        bars = market_data_service.series("aapl")

        assert len(bars) == 15
        assert bars[0].timestamp < bars[-1].timestamp
