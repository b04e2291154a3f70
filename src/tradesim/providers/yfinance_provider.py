"""Yahoo Finance market data provider via yfinance."""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Callable, Optional, TypeVar

from tradesim.core.exceptions import (
    QuoteUnavailableError,
    RateLimitedError,
    SymbolNotFoundError,
    QuoteTransportError,
    ValidationError,
)
from tradesim.core.timezone import now_eastern, to_eastern
from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.providers.market_data_provider import DAILY_INTERVAL

T = TypeVar("T")

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0

# Our interval names -> (yfinance interval, history period)
_YF_INTERVALS = {
    DAILY_INTERVAL: ("1d", "3mo"),
    "1min": ("1m", "1d"),
    "5min": ("5m", "5d"),
    "15min": ("15m", "5d"),
    "30min": ("30m", "5d"),
    "60min": ("60m", "1mo"),
}


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _is_rate_limit(error: Exception) -> bool:
    from yfinance.exceptions import YFRateLimitError
    return isinstance(error, YFRateLimitError)


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        number = Decimal(str(float(value)))
    except (TypeError, ValueError):
        return None
    # pandas reports missing prices as NaN
    return number if number.is_finite() else None


class YFinanceProvider:
    """
    Market data from Yahoo Finance.

    yfinance has no per-call timeout, so each call runs on a worker thread
    and is abandoned after fetch_timeout_seconds.
    """

    def __init__(self, fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS):
        self._fetch_timeout = fetch_timeout_seconds

    def get_quote(self, symbol: str) -> Quote:
        info = self._call(symbol, lambda: _get_yf().Ticker(symbol).info)
        if not isinstance(info, dict):
            raise SymbolNotFoundError(symbol, "no quote data")

        # Price: currentPrice preferred, then regularMarketPrice
        price = _to_decimal(info.get("currentPrice") or info.get("regularMarketPrice"))
        if price is None or price <= 0:
            raise SymbolNotFoundError(symbol, "no valid price")

        prev_close = _to_decimal(
            info.get("previousClose") or info.get("regularMarketPreviousClose")
        )
        change: Optional[Decimal] = None
        change_percent: Optional[Decimal] = None
        if prev_close:
            change = price - prev_close
            change_percent = (change / prev_close * 100).quantize(Decimal("0.0001"))

        volume = info.get("volume") or info.get("regularMarketVolume")
        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=int(volume) if volume is not None else None,
            as_of=now_eastern(),
        )

    def get_overview(self, symbol: str) -> CompanyOverview:
        info = self._call(symbol, lambda: _get_yf().Ticker(symbol).info)
        if not isinstance(info, dict):
            raise SymbolNotFoundError(symbol, "no company data")

        # Name: longName preferred, then shortName
        name = (info.get("longName") or info.get("shortName") or "").strip()
        if not name:
            raise SymbolNotFoundError(symbol, "no company data")

        market_cap = info.get("marketCap")
        pe_ratio = info.get("trailingPE")
        return CompanyOverview(
            symbol=symbol,
            name=name,
            sector=info.get("sector"),
            industry=info.get("industry"),
            market_cap=str(int(market_cap)) if market_cap is not None else None,
            pe_ratio=f"{float(pe_ratio):.2f}" if pe_ratio is not None else None,
            description=info.get("longBusinessSummary"),
        )

    def search(self, keywords: str) -> list[SymbolMatch]:
        quotes = self._call(keywords, lambda: _get_yf().Search(keywords, max_results=10).quotes)
        return [
            SymbolMatch(
                symbol=q.get("symbol", ""),
                name=q.get("longname") or q.get("shortname") or "",
                type=q.get("quoteType", ""),
                region=q.get("exchDisp") or q.get("exchange", ""),
            )
            for q in quotes or []
            if q.get("symbol")
        ]

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        if interval not in _YF_INTERVALS:
            raise ValidationError(f"Unsupported interval: {interval}")
        yf_interval, period = _YF_INTERVALS[interval]

        frame = self._call(
            symbol,
            lambda: _get_yf().Ticker(symbol).history(period=period, interval=yf_interval),
        )
        if frame is None or frame.empty:
            raise SymbolNotFoundError(symbol, "no series data")

        bars = []
        for stamp, row in frame.iterrows():
            close = _to_decimal(row["Close"])
            if close is None:
                continue
            bars.append(
                PriceBar(
                    timestamp=to_eastern(stamp.to_pydatetime()),
                    open=_to_decimal(row["Open"]),
                    high=_to_decimal(row["High"]),
                    low=_to_decimal(row["Low"]),
                    close=close,
                    volume=int(row.get("Volume", 0) or 0),
                )
            )
        return bars

    def _call(self, label: str, fetch: Callable[[], T]) -> T:
        """Run a yfinance call with a timeout, mapping its failures to quote errors."""
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(fetch)
        try:
            return future.result(timeout=self._fetch_timeout)
        except FuturesTimeoutError as e:
            raise QuoteTransportError(label, "request timed out") from e
        except QuoteUnavailableError:
            raise
        except Exception as e:
            if _is_rate_limit(e):
                raise RateLimitedError(label, "Yahoo Finance rate limit reached") from e
            raise QuoteTransportError(label, str(e)) from e
        finally:
            executor.shutdown(wait=False)
