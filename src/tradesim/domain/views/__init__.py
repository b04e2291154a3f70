"""View models for market data, portfolio and statistics outputs."""

from tradesim.domain.views.market import Quote, CompanyOverview, SymbolMatch, PriceBar
from tradesim.domain.views.portfolio import (
    HoldingValuation,
    PortfolioValuation,
    PortfolioView,
    UserStats,
)

__all__ = [
    "Quote",
    "CompanyOverview",
    "SymbolMatch",
    "PriceBar",
    "HoldingValuation",
    "PortfolioValuation",
    "PortfolioView",
    "UserStats",
]
