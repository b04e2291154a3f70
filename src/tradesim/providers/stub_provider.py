"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta
from decimal import Decimal

from tradesim.core.exceptions import ValidationError
from tradesim.core.timezone import now_eastern
from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.providers.market_data_provider import DAILY_INTERVAL, INTRADAY_INTERVALS


# Deterministic fake data for common symbols: (last, prev_close, name, sector)
_STUB_COMPANIES: dict[str, tuple[Decimal, Decimal, str, str]] = {
    "AAPL": (Decimal("185.50"), Decimal("184.25"), "Apple Inc.", "Technology"),
    "MSFT": (Decimal("378.25"), Decimal("376.80"), "Microsoft Corporation", "Technology"),
    "TSLA": (Decimal("248.75"), Decimal("250.10"), "Tesla Inc.", "Consumer Cyclical"),
    "AMZN": (Decimal("178.50"), Decimal("177.25"), "Amazon.com Inc.", "Consumer Cyclical"),
    "GOOGL": (Decimal("142.75"), Decimal("141.50"), "Alphabet Inc.", "Communication Services"),
    "NVDA": (Decimal("485.25"), Decimal("482.50"), "NVIDIA Corporation", "Technology"),
    "V": (Decimal("275.40"), Decimal("274.10"), "Visa Inc.", "Financial Services"),
    "SBUX": (Decimal("92.15"), Decimal("93.00"), "Starbucks Corporation", "Consumer Cyclical"),
    "DIS": (Decimal("111.30"), Decimal("110.85"), "The Walt Disney Company", "Communication Services"),
    "BA": (Decimal("205.60"), Decimal("207.20"), "The Boeing Company", "Industrials"),
}

_MINUTES = {"1min": 1, "5min": 5, "15min": 15, "30min": 30, "60min": 60}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Known symbols use predefined prices; other symbols get a price derived
    from the seed and the symbol, so repeated calls agree.
    """

    def __init__(self, seed: int = 42):
        self._seed = seed

    def get_quote(self, symbol: str) -> Quote:
        last_price, prev_close = self._prices(symbol.upper())
        change = last_price - prev_close
        return Quote(
            symbol=symbol.upper(),
            price=last_price,
            change=change,
            change_percent=(change / prev_close * 100).quantize(Decimal("0.0001")),
            volume=1_000_000,
            as_of=now_eastern(),
        )

    def get_overview(self, symbol: str) -> CompanyOverview:
        symbol = symbol.upper()
        last_price, _, name, sector = _STUB_COMPANIES.get(
            symbol, (None, None, f"{symbol} Holdings", "Unknown")
        )
        return CompanyOverview(
            symbol=symbol,
            name=name,
            sector=sector,
            industry=None,
            market_cap=None,
            pe_ratio=None,
            description=f"Offline placeholder data for {symbol}.",
        )

    def search(self, keywords: str) -> list[SymbolMatch]:
        needle = keywords.strip().lower()
        return [
            SymbolMatch(symbol=symbol, name=data[2], type="Equity", region="United States")
            for symbol, data in _STUB_COMPANIES.items()
            if needle in symbol.lower() or needle in data[2].lower()
        ]

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        if interval == DAILY_INTERVAL:
            step = timedelta(days=1)
        elif interval in INTRADAY_INTERVALS:
            step = timedelta(minutes=_MINUTES[interval])
        else:
            raise ValidationError(f"Unsupported interval: {interval}")

        symbol = symbol.upper()
        last_price, _ = self._prices(symbol)
        rng = random.Random(f"{self._seed}:{symbol}:{interval}")
        end = now_eastern().replace(second=0, microsecond=0)

        bars = []
        close = last_price
        for i in range(30):
            open_ = (close * Decimal(str(1 + (rng.random() - 0.5) * 0.02))).quantize(Decimal("0.01"))
            high = max(open_, close) + Decimal("0.50")
            low = min(open_, close) - Decimal("0.50")
            bars.append(
                PriceBar(
                    timestamp=end - step * i,
                    open=open_,
                    high=high,
                    low=low,
                    close=close,
                    volume=100_000 + rng.randint(0, 50_000),
                )
            )
            close = open_
        bars.reverse()
        return bars

    def _prices(self, symbol: str) -> tuple[Decimal, Decimal]:
        if symbol in _STUB_COMPANIES:
            last_price, prev_close, _, _ = _STUB_COMPANIES[symbol]
            return last_price, prev_close
        # Generate deterministic random price based on symbol
        rng = random.Random(f"{self._seed}:{symbol}")
        last_price = Decimal(str(50 + rng.random() * 200)).quantize(Decimal("0.01"))
        change_pct = Decimal(str((rng.random() - 0.5) * 0.04))
        prev_close = (last_price / (1 + change_pct)).quantize(Decimal("0.01"))
        return last_price, prev_close
