"""Account, trading, portfolio and watchlist endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import (
    get_ledger_service,
    get_market_data_service,
    get_watchlist_service,
    get_analysis_service,
)
from tradesim.api.schemas import (
    AccountResponse,
    HoldingValuationResponse,
    PortfolioResponse,
    TransactionResponse,
    TransactionListResponse,
    StatsResponse,
    TradeRequest,
    TradeResponse,
    WatchlistAddRequest,
    WatchlistResponse,
)
from tradesim.commands.parser import parse_symbol
from tradesim.core.exceptions import InsufficientHoldingsError
from tradesim.domain.models import TradeSide
from tradesim.services import (
    LedgerService,
    MarketDataService,
    WatchlistService,
    AnalysisService,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=AccountResponse)
def get_account(
    user_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Get account by user ID."""
    return AccountResponse.model_validate(ledger.get_account(user_id))


@router.get("/{user_id}/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    user_id: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> PortfolioResponse:
    """Holdings valued at current prices."""
    view = analysis.portfolio(user_id)
    valuation = view.valuation
    return PortfolioResponse(
        user_id=view.user_id,
        cash_balance=view.cash_balance,
        holdings=[HoldingValuationResponse.model_validate(item) for item in valuation.items],
        total_value=valuation.total_value,
        total_invested=valuation.total_invested,
        total_unrealized_pl=valuation.total_unrealized_pl,
        total_unrealized_pl_percent=valuation.total_unrealized_pl_percent,
        unpriced_symbols=valuation.unpriced_symbols,
        as_of=view.as_of,
    )


@router.get("/{user_id}/transactions", response_model=TransactionListResponse)
def list_transactions(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Most recent N trades"),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List trades, newest first."""
    ledger.get_account(user_id)
    transactions = ledger.list_transactions(user_id, limit=limit)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/{user_id}/stats", response_model=StatsResponse)
def get_stats(
    user_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> StatsResponse:
    """Trade counters and win rate."""
    return StatsResponse.model_validate(ledger.get_stats(user_id))


@router.post("/{user_id}/trades", response_model=TradeResponse, status_code=201)
def execute_trade(
    user_id: str,
    data: TradeRequest,
    ledger: LedgerService = Depends(get_ledger_service),
    market: MarketDataService = Depends(get_market_data_service),
) -> TradeResponse:
    """Buy or sell at the current market price."""
    symbol = parse_symbol(data.symbol)
    ledger.ensure_account(user_id)
    price = market.current_price(symbol)

    if data.side == TradeSide.BUY:
        result = ledger.buy(user_id, symbol, data.quantity, price)
    else:
        result = ledger.sell(user_id, symbol, data.quantity, price)
        if result is None:
            holding = ledger.get_holding(user_id, symbol)
            available = holding.quantity if holding else 0
            raise InsufficientHoldingsError(symbol, data.quantity, available)

    return TradeResponse(
        transaction=TransactionResponse.model_validate(result.transaction),
        cash_balance=result.cash_balance,
    )


@router.post("/{user_id}/reset", response_model=AccountResponse)
def reset_account(
    user_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Restore the starting cash balance. Holdings and history are kept."""
    return AccountResponse.model_validate(ledger.reset(user_id))


@router.get("/{user_id}/watchlist", response_model=WatchlistResponse)
def get_watchlist(
    user_id: str,
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    return WatchlistResponse(symbols=watchlist.list_symbols(user_id))


@router.post("/{user_id}/watchlist", response_model=WatchlistResponse)
def add_to_watchlist(
    user_id: str,
    data: WatchlistAddRequest,
    ledger: LedgerService = Depends(get_ledger_service),
    market: MarketDataService = Depends(get_market_data_service),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    """Add a symbol after checking that it has a price."""
    symbol = parse_symbol(data.symbol)
    ledger.ensure_account(user_id)
    market.current_price(symbol)
    added = watchlist.add(user_id, symbol)
    return WatchlistResponse(symbols=watchlist.list_symbols(user_id), added=added)
