"""Application context: builds and owns every long-lived component.

The HTTP app and tests get their services from one AppContext instead of
module-level singletons.
"""

import logging
import time
from typing import Callable, Optional

from sqlalchemy import Engine

from tradesim.config.settings import Settings, get_settings
from tradesim.repositories.sqlalchemy import (
    create_db_engine,
    create_session_factory,
    init_db,
    unit_of_work_factory,
)
from tradesim.providers import (
    MarketDataProvider,
    AlphaVantageProvider,
    YFinanceProvider,
    StubMarketDataProvider,
)
from tradesim.services import (
    QuoteCache,
    MarketDataService,
    LedgerService,
    WatchlistService,
    AnalysisService,
)
from tradesim.commands import CommandRouter

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> MarketDataProvider:
    """Create the market data provider selected in settings."""
    if settings.market_data_provider == "yfinance":
        return YFinanceProvider(fetch_timeout_seconds=settings.quote_timeout_seconds)
    if settings.market_data_provider == "stub":
        return StubMarketDataProvider()
    return AlphaVantageProvider(
        api_key=settings.alpha_vantage_api_key,
        base_url=settings.alpha_vantage_base_url,
        timeout_seconds=settings.quote_timeout_seconds,
    )


class AppContext:
    """
    Application context providing access to all services.

    Nothing is built until initialize() runs (the FastAPI lifespan calls it,
    and so does the first property access).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[MarketDataProvider] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            settings: Settings to use; the global settings when omitted.
            provider: Market data provider; built from settings when omitted.
            clock: Monotonic clock for quote freshness.
        """
        self._settings = settings
        self._provider = provider
        self._clock = clock
        self._engine: Optional[Engine] = None
        self._initialized = False

        self._market_data: Optional[MarketDataService] = None
        self._ledger: Optional[LedgerService] = None
        self._watchlist: Optional[WatchlistService] = None
        self._analysis: Optional[AnalysisService] = None
        self._commands: Optional[CommandRouter] = None

    def initialize(self) -> None:
        """Create the database schema and wire the services. Idempotent."""
        if self._initialized:
            return

        settings = self.settings
        self._engine = create_db_engine(settings.get_database_url())
        init_db(self._engine)
        uow_factory = unit_of_work_factory(create_session_factory(self._engine))

        provider = self._provider or build_provider(settings)
        cache = QuoteCache(
            ttl_seconds=settings.quote_cache_ttl_seconds,
            max_entries=settings.quote_cache_max_entries,
            clock=self._clock,
        )

        self._market_data = MarketDataService(provider=provider, cache=cache)
        self._ledger = LedgerService(uow_factory, initial_balance=settings.initial_balance)
        self._watchlist = WatchlistService(uow_factory)
        self._analysis = AnalysisService(ledger=self._ledger, market_data=self._market_data)
        self._commands = CommandRouter(
            ledger=self._ledger,
            market_data=self._market_data,
            watchlist=self._watchlist,
            analysis=self._analysis,
            history_limit=settings.history_limit,
            search_limit=settings.search_result_limit,
        )

        self._initialized = True
        logger.info(
            "Initialized %s with %s market data",
            settings.app_name,
            type(provider).__name__,
        )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def market_data(self) -> MarketDataService:
        self.initialize()
        return self._market_data

    @property
    def ledger(self) -> LedgerService:
        self.initialize()
        return self._ledger

    @property
    def watchlist(self) -> WatchlistService:
        self.initialize()
        return self._watchlist

    @property
    def analysis(self) -> AnalysisService:
        self.initialize()
        return self._analysis

    @property
    def commands(self) -> CommandRouter:
        self.initialize()
        return self._commands

    def close(self) -> None:
        """Release the database engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._initialized = False
