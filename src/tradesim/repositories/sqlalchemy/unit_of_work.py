"""SQLAlchemy unit of work: all repositories share one session and one transaction."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tradesim.core.exceptions import PersistenceError
from tradesim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradesim.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from tradesim.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from tradesim.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """
    Transaction boundary for a single ledger operation.

    Usage:
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.accounts.update(...)
            uow.commit()

    Anything not committed is rolled back on exit. Store errors surface as
    PersistenceError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.accounts = SqlAlchemyAccountRepository(self._session)
        self.holdings = SqlAlchemyHoldingRepository(self._session)
        self.transactions = SqlAlchemyTransactionRepository(self._session)
        self.watchlist = SqlAlchemyWatchlistRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            logger.error("Store operation failed: %s", exc)
            raise PersistenceError() from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Commit failed: %s", e)
            raise PersistenceError() from e

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()


def unit_of_work_factory(session_factory: sessionmaker):
    """Return a zero-argument callable producing fresh units of work."""

    def _create() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return _create
