"""Holding repository protocol."""

from typing import Protocol, Optional

from tradesim.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get(self, user_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for a user and symbol."""
        ...

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List all holdings of a user ordered by symbol."""
        ...

    def upsert(self, holding: Holding) -> Holding:
        """Insert or update a holding."""
        ...

    def delete(self, user_id: str, symbol: str) -> None:
        """Remove a holding row."""
        ...
