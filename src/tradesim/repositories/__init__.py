"""Repository layer - data access abstractions and implementations."""

from tradesim.repositories.protocols import (
    AccountRepository,
    HoldingRepository,
    TransactionRepository,
    WatchlistRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "HoldingRepository",
    "TransactionRepository",
    "WatchlistRepository",
    "UnitOfWork",
]
