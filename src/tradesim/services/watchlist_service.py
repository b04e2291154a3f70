"""Watchlist service."""

import logging
from typing import Callable

from tradesim.core.timezone import now_eastern
from tradesim.domain.models import WatchlistEntry
from tradesim.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)


class WatchlistService:
    """Symbols a user follows. Adding an existing symbol is a no-op."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def add(self, user_id: str, symbol: str) -> bool:
        """Add symbol to the watchlist; returns False if it was already there."""
        symbol = symbol.strip().upper()
        with self._uow_factory() as uow:
            added = uow.watchlist.add(
                WatchlistEntry(user_id=user_id, symbol=symbol, added_at=now_eastern())
            )
            if added:
                uow.commit()
        if added:
            logger.info("User %s is now watching %s", user_id, symbol)
        return added

    def list_symbols(self, user_id: str) -> list[str]:
        """Watched symbols in the order they were added."""
        with self._uow_factory() as uow:
            return [entry.symbol for entry in uow.watchlist.list_by_user(user_id)]
