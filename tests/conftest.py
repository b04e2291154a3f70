"""
Pytest configuration and fixtures for trading simulator tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic and failing market data providers
- A fake monotonic clock for the quote cache
- Service, command router and API client fixtures
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from tradesim.app_context import AppContext
from tradesim.main import create_app
from tradesim.config.settings import Settings, reset_settings
from tradesim.core.exceptions import (
    QuoteTransportError,
    QuoteUnavailableError,
    SymbolNotFoundError,
    ValidationError,
)
from tradesim.core.timezone import EASTERN_TZ
from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.providers.market_data_provider import DAILY_INTERVAL, INTRADAY_INTERVALS
from tradesim.repositories.sqlalchemy import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
    unit_of_work_factory,
)
from tradesim.commands import CommandRouter
from tradesim.services import (
    QuoteCache,
    MarketDataService,
    LedgerService,
    WatchlistService,
    AnalysisService,
)

INITIAL_BALANCE = Decimal("10000.00")
USER_ID = "1001"


# =============================================================================
# TIME HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def uow_factory(session_factory):
    """Factory producing units of work on the test database."""
    return unit_of_work_factory(session_factory)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Prices can be moved with set_price() and every call is recorded in
    calls. Setting failure makes every call raise it.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("150.00"), Decimal("1.50"), Decimal("1.01"), 52_000_000),
        "MSFT": (Decimal("380.00"), Decimal("-2.40"), Decimal("-0.63"), 21_000_000),
        "TSLA": (Decimal("250.00"), Decimal("3.10"), Decimal("1.26"), 98_000_000),
        "GOOGL": (Decimal("140.00"), Decimal("0.70"), Decimal("0.50"), 25_000_000),
        "NVDA": (Decimal("120.00"), Decimal("-1.20"), Decimal("-0.99"), 310_000_000),
    }

    NAMES = {
        "AAPL": "Apple Inc.",
        "MSFT": "Microsoft Corporation",
        "TSLA": "Tesla Inc.",
        "GOOGL": "Alphabet Inc.",
        "NVDA": "NVIDIA Corporation",
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or eastern_datetime(2024, 6, 14, 16, 0, 0)
        self.prices = {symbol: q[0] for symbol, q in self.FIXED_QUOTES.items()}
        self.calls: list[tuple[str, str]] = []
        self.failure: Optional[QuoteUnavailableError] = None

    def set_price(self, symbol: str, price: Decimal) -> None:
        self.prices[symbol] = price

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.calls if k == kind)

    def get_quote(self, symbol: str) -> Quote:
        self._record("quote", symbol)
        price = self.prices[symbol]
        _, change, change_percent, volume = self.FIXED_QUOTES[symbol]
        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            as_of=self._as_of,
        )

    def get_overview(self, symbol: str) -> CompanyOverview:
        self._record("overview", symbol)
        if symbol == "AAPL":
            return CompanyOverview(
                symbol="AAPL",
                name="Apple Inc",
                sector="TECHNOLOGY",
                industry="ELECTRONIC COMPUTERS",
                market_cap="2950000000000",
                pe_ratio="29.50",
                description="Apple designs consumer electronics. " * 12,
            )
        return CompanyOverview(symbol=symbol, name=self.NAMES[symbol], pe_ratio=None)

    def search(self, keywords: str) -> list[SymbolMatch]:
        self._record("search", keywords)
        needle = keywords.lower()
        return [
            SymbolMatch(symbol=s, name=n, type="Equity", region="United States")
            for s, n in self.NAMES.items()
            if needle in s.lower() or needle in n.lower()
        ]

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        self._record("series", symbol)
        if interval != DAILY_INTERVAL and interval not in INTRADAY_INTERVALS:
            raise ValidationError(f"Unsupported interval: {interval}")
        start = eastern_datetime(2024, 6, 1, 16, 0, 0)
        base = self.prices[symbol]
        return [
            PriceBar(
                timestamp=start + timedelta(days=i),
                open=base + i,
                high=base + i + 1,
                low=base + i - 1,
                close=base + i,
                volume=1_000_000,
            )
            for i in range(15)
        ]

    def _record(self, kind: str, key: str) -> None:
        self.calls.append((kind, key))
        if self.failure is not None:
            raise self.failure
        if kind != "search" and key not in self.prices:
            raise SymbolNotFoundError(key, "Invalid API call")


class FailingMarketProvider:
    """Market provider whose every call fails with the given error type."""

    def __init__(self, error_cls: type = QuoteTransportError):
        self._error_cls = error_cls

    def get_quote(self, symbol: str) -> Quote:
        raise self._error_cls(symbol, "network unavailable")

    def get_overview(self, symbol: str) -> CompanyOverview:
        raise self._error_cls(symbol, "network unavailable")

    def search(self, keywords: str) -> list[SymbolMatch]:
        raise self._error_cls(keywords, "network unavailable")

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        raise self._error_cls(symbol, "network unavailable")


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    return FailingMarketProvider()


@pytest.fixture
def quote_cache(fake_clock) -> QuoteCache:
    return QuoteCache(ttl_seconds=60, clock=fake_clock)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider, quote_cache) -> MarketDataService:
    """Provide MarketDataService over the deterministic provider."""
    return MarketDataService(provider=deterministic_provider, cache=quote_cache)


@pytest.fixture
def ledger_service(uow_factory) -> LedgerService:
    return LedgerService(uow_factory, initial_balance=INITIAL_BALANCE)


@pytest.fixture
def watchlist_service(uow_factory) -> WatchlistService:
    return WatchlistService(uow_factory)


@pytest.fixture
def analysis_service(ledger_service, market_data_service) -> AnalysisService:
    return AnalysisService(ledger=ledger_service, market_data=market_data_service)


@pytest.fixture
def command_router(
    ledger_service,
    market_data_service,
    watchlist_service,
    analysis_service,
) -> CommandRouter:
    return CommandRouter(
        ledger=ledger_service,
        market_data=market_data_service,
        watchlist=watchlist_service,
        analysis=analysis_service,
        history_limit=10,
        search_limit=5,
    )


@pytest.fixture
def registered_user(ledger_service) -> str:
    """A user registered with the starting balance."""
    ledger_service.ensure_account(USER_ID, username="trader", first_name="Test")
    return USER_ID


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        market_data_provider="stub",
        initial_balance=INITIAL_BALANCE,
        log_level="WARNING",
    )


@pytest.fixture
def app_context(test_settings, deterministic_provider, fake_clock) -> AppContext:
    context = AppContext(settings=test_settings, provider=deterministic_provider, clock=fake_clock)
    yield context
    context.close()


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to an in-memory database."""
    with TestClient(create_app(app_context)) as c:
        yield c


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
