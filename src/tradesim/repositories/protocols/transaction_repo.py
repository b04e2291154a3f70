"""Transaction repository protocol."""

from typing import Protocol, Optional

from tradesim.domain.models import TradeTransaction


class TransactionRepository(Protocol):
    """Interface for the append-only trade log."""

    def append(self, transaction: TradeTransaction) -> TradeTransaction:
        """Record an executed trade."""
        ...

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[TradeTransaction]:
        """List a user's trades, newest first."""
        ...

    def count_by_user(self, user_id: str) -> int:
        """Number of trades recorded for a user."""
        ...
