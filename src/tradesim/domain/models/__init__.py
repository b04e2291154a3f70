"""Domain models package."""

from tradesim.domain.models.enums import TradeSide
from tradesim.domain.models.account import UserAccount
from tradesim.domain.models.holding import Holding
from tradesim.domain.models.transaction import TradeTransaction
from tradesim.domain.models.watchlist import WatchlistEntry

__all__ = [
    "TradeSide",
    "UserAccount",
    "Holding",
    "TradeTransaction",
    "WatchlistEntry",
]
