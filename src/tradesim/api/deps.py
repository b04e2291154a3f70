"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from tradesim.app_context import AppContext
from tradesim.commands import CommandRouter
from tradesim.services import (
    LedgerService,
    MarketDataService,
    WatchlistService,
    AnalysisService,
)


def get_context(request: Request) -> AppContext:
    """Provide the AppContext the application was created with."""
    return request.app.state.context


def get_ledger_service(context: AppContext = Depends(get_context)) -> LedgerService:
    return context.ledger


def get_market_data_service(context: AppContext = Depends(get_context)) -> MarketDataService:
    return context.market_data


def get_watchlist_service(context: AppContext = Depends(get_context)) -> WatchlistService:
    return context.watchlist


def get_analysis_service(context: AppContext = Depends(get_context)) -> AnalysisService:
    return context.analysis


def get_command_router(context: AppContext = Depends(get_context)) -> CommandRouter:
    return context.commands
