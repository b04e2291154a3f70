"""SQLAlchemy repository implementations."""

from tradesim.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
)
from tradesim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradesim.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from tradesim.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from tradesim.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository
from tradesim.repositories.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    unit_of_work_factory,
)

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyUnitOfWork",
    "unit_of_work_factory",
]
