"""Alpha Vantage market data provider."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import requests

from tradesim.core.exceptions import (
    RateLimitedError,
    SymbolNotFoundError,
    QuoteTransportError,
    ValidationError,
)
from tradesim.core.timezone import now_eastern, parse_market_timestamp
from tradesim.domain.views import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.providers.market_data_provider import DAILY_INTERVAL, INTRADAY_INTERVALS

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Keys Alpha Vantage uses to report an exhausted quota instead of data
_RATE_LIMIT_KEYS = ("Note", "Information")


def _decimal(value, symbol: str, field: str) -> Decimal:
    try:
        number = Decimal(str(value).strip().rstrip("%"))
    except (InvalidOperation, AttributeError) as e:
        raise QuoteTransportError(symbol, f"malformed {field}: {value!r}") from e
    if not number.is_finite():
        raise QuoteTransportError(symbol, f"malformed {field}: {value!r}")
    return number


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text in ("None", "-"):
        return None
    return text


class AlphaVantageProvider:
    """
    Market data from the Alpha Vantage query API.

    One GET per call with a bounded timeout. Quota messages become
    RateLimitedError, unknown symbols SymbolNotFoundError and everything
    else that goes wrong on the wire QuoteTransportError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def get_quote(self, symbol: str) -> Quote:
        payload = self._request(symbol, function="GLOBAL_QUOTE", symbol=symbol)
        quote = payload.get("Global Quote")
        if not quote:
            raise SymbolNotFoundError(symbol, "no quote data")

        price = _decimal(quote.get("05. price"), symbol, "price")
        if price <= 0:
            raise SymbolNotFoundError(symbol, "no valid price")

        change = quote.get("09. change")
        change_percent = quote.get("10. change percent")
        volume = quote.get("06. volume")
        return Quote(
            symbol=symbol,
            price=price,
            change=_decimal(change, symbol, "change") if change is not None else None,
            change_percent=(
                _decimal(change_percent, symbol, "change percent")
                if change_percent is not None
                else None
            ),
            volume=int(_decimal(volume, symbol, "volume")) if volume is not None else None,
            as_of=now_eastern(),
        )

    def get_overview(self, symbol: str) -> CompanyOverview:
        payload = self._request(symbol, function="OVERVIEW", symbol=symbol)
        name = _optional_text(payload.get("Name"))
        if not name:
            raise SymbolNotFoundError(symbol, "no company data")

        return CompanyOverview(
            symbol=payload.get("Symbol") or symbol,
            name=name,
            sector=_optional_text(payload.get("Sector")),
            industry=_optional_text(payload.get("Industry")),
            market_cap=_optional_text(payload.get("MarketCapitalization")),
            pe_ratio=_optional_text(payload.get("PERatio")),
            description=_optional_text(payload.get("Description")),
        )

    def search(self, keywords: str) -> list[SymbolMatch]:
        payload = self._request(keywords, function="SYMBOL_SEARCH", keywords=keywords)
        matches = payload.get("bestMatches") or []
        return [
            SymbolMatch(
                symbol=m.get("1. symbol", ""),
                name=m.get("2. name", ""),
                type=m.get("3. type", ""),
                region=m.get("4. region", ""),
            )
            for m in matches
            if m.get("1. symbol")
        ]

    def get_series(self, symbol: str, interval: str = DAILY_INTERVAL) -> list[PriceBar]:
        if interval == DAILY_INTERVAL:
            payload = self._request(symbol, function="TIME_SERIES_DAILY", symbol=symbol)
            series_key = "Time Series (Daily)"
            tz_key = "5. Time Zone"
        elif interval in INTRADAY_INTERVALS:
            payload = self._request(
                symbol,
                function="TIME_SERIES_INTRADAY",
                symbol=symbol,
                interval=interval,
            )
            series_key = f"Time Series ({interval})"
            tz_key = "6. Time Zone"
        else:
            raise ValidationError(f"Unsupported interval: {interval}")

        series = payload.get(series_key)
        if not series:
            raise SymbolNotFoundError(symbol, "no series data")
        tz_name = (payload.get("Meta Data") or {}).get(tz_key)

        bars = []
        for stamp, values in series.items():
            bars.append(
                PriceBar(
                    timestamp=parse_market_timestamp(stamp, tz_name),
                    open=_decimal(values.get("1. open"), symbol, "open"),
                    high=_decimal(values.get("2. high"), symbol, "high"),
                    low=_decimal(values.get("3. low"), symbol, "low"),
                    close=_decimal(values.get("4. close"), symbol, "close"),
                    volume=int(_decimal(values.get("5. volume", "0"), symbol, "volume")),
                )
            )
        bars.sort(key=lambda b: b.timestamp)
        return bars

    def _request(self, label: str, **params) -> dict:
        """Issue one query and return the decoded payload or raise a quote error."""
        params["apikey"] = self._api_key
        try:
            response = self._session.get(self._base_url, params=params, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            raise QuoteTransportError(label, "request timed out") from e
        except ValueError as e:
            raise QuoteTransportError(label, "malformed response") from e
        except requests.RequestException as e:
            raise QuoteTransportError(label, str(e)) from e

        if not isinstance(payload, dict):
            raise QuoteTransportError(label, "malformed response")

        for key in _RATE_LIMIT_KEYS:
            if key in payload:
                logger.warning("Alpha Vantage quota message for %s: %s", label, payload[key])
                raise RateLimitedError(label, "API request limit reached")
        if "Error Message" in payload:
            raise SymbolNotFoundError(label, payload["Error Message"])
        return payload
