"""Domain layer - pure business models with no external dependencies."""

from tradesim.domain.models import (
    UserAccount,
    Holding,
    TradeTransaction,
    WatchlistEntry,
    TradeSide,
)

__all__ = [
    "UserAccount",
    "Holding",
    "TradeTransaction",
    "WatchlistEntry",
    "TradeSide",
]
