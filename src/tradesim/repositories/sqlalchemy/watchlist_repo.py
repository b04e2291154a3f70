"""SQLAlchemy implementation of WatchlistRepository."""

from sqlalchemy.orm import Session

from tradesim.domain.models import WatchlistEntry
from tradesim.repositories.sqlalchemy.orm_models import WatchlistEntryORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, entry: WatchlistEntry) -> bool:
        """Insert an entry; an existing (user, symbol) pair is left untouched."""
        existing = (
            self._db.query(WatchlistEntryORM)
            .filter(
                WatchlistEntryORM.user_id == entry.user_id,
                WatchlistEntryORM.symbol == entry.symbol,
            )
            .first()
        )
        if existing:
            return False

        self._db.add(
            WatchlistEntryORM(
                user_id=entry.user_id,
                symbol=entry.symbol,
                added_at=entry.added_at,
            )
        )
        self._db.flush()
        return True

    def list_by_user(self, user_id: str) -> list[WatchlistEntry]:
        """List a user's watchlist in insertion order."""
        orm_entries = (
            self._db.query(WatchlistEntryORM)
            .filter(WatchlistEntryORM.user_id == user_id)
            .order_by(WatchlistEntryORM.id)
            .all()
        )
        return [
            WatchlistEntry(user_id=e.user_id, symbol=e.symbol, added_at=e.added_at)
            for e in orm_entries
        ]
