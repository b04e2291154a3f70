"""Market data endpoints."""

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import get_market_data_service
from tradesim.api.schemas import (
    QuoteResponse,
    CompanyOverviewResponse,
    SymbolMatchResponse,
    SearchResponse,
    PriceBarResponse,
    SeriesResponse,
)
from tradesim.commands.parser import parse_symbol
from tradesim.providers.market_data_provider import DAILY_INTERVAL
from tradesim.services import MarketDataService

router = APIRouter(prefix="/quotes", tags=["quotes"])


# Registered before /{symbol} so "search" is not taken for a ticker
@router.get("/search", response_model=SearchResponse)
def search_symbols(
    keywords: str = Query(..., min_length=1, description="Ticker or company name"),
    market: MarketDataService = Depends(get_market_data_service),
) -> SearchResponse:
    """Search symbols by ticker or company name."""
    matches = market.search(keywords)
    return SearchResponse(
        keywords=keywords,
        matches=[SymbolMatchResponse.model_validate(m) for m in matches],
    )


@router.get("/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    """Latest quote, served from the price cache while fresh."""
    return QuoteResponse.model_validate(market.get_quote(parse_symbol(symbol)))


@router.get("/{symbol}/overview", response_model=CompanyOverviewResponse)
def get_overview(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> CompanyOverviewResponse:
    return CompanyOverviewResponse.model_validate(market.company_overview(parse_symbol(symbol)))


@router.get("/{symbol}/series", response_model=SeriesResponse)
def get_series(
    symbol: str,
    interval: str = Query(DAILY_INTERVAL, description="daily, 1min, 5min, 15min, 30min or 60min"),
    market: MarketDataService = Depends(get_market_data_service),
) -> SeriesResponse:
    symbol = parse_symbol(symbol)
    bars = market.series(symbol, interval)
    return SeriesResponse(
        symbol=symbol,
        interval=interval,
        bars=[PriceBarResponse.model_validate(b) for b in bars],
    )
