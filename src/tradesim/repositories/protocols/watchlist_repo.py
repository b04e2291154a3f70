"""Watchlist repository protocol."""

from typing import Protocol

from tradesim.domain.models import WatchlistEntry


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def add(self, entry: WatchlistEntry) -> bool:
        """Insert an entry; returns False when the pair already exists."""
        ...

    def list_by_user(self, user_id: str) -> list[WatchlistEntry]:
        """List a user's watchlist in insertion order."""
        ...
