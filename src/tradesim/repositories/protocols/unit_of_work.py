"""Unit of work protocol: one store transaction spanning all repositories."""

from typing import Protocol

from tradesim.repositories.protocols.account_repo import AccountRepository
from tradesim.repositories.protocols.holding_repo import HoldingRepository
from tradesim.repositories.protocols.transaction_repo import TransactionRepository
from tradesim.repositories.protocols.watchlist_repo import WatchlistRepository


class UnitOfWork(Protocol):
    """
    Transaction boundary around the repositories.

    Changes are only visible after commit(); leaving the context without a
    commit discards them.
    """

    accounts: AccountRepository
    holdings: HoldingRepository
    transactions: TransactionRepository
    watchlist: WatchlistRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
