"""Market data providers module."""

from tradesim.providers.market_data_provider import (
    MarketDataProvider,
    DAILY_INTERVAL,
    INTRADAY_INTERVALS,
)
from tradesim.providers.alpha_vantage_provider import AlphaVantageProvider
from tradesim.providers.yfinance_provider import YFinanceProvider
from tradesim.providers.stub_provider import StubMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "DAILY_INTERVAL",
    "INTRADAY_INTERVALS",
    "AlphaVantageProvider",
    "YFinanceProvider",
    "StubMarketDataProvider",
]
