"""User account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class UserAccount:
    """
    Simulator account for one chat user.

    Created with the starting balance on the first observed interaction,
    never deleted. The trade counters only ever grow.
    """

    user_id: str
    cash_balance: Decimal
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    total_trades: int = 0
    profitable_trades: int = 0
    registered_at: Optional[datetime] = field(default=None)
    last_activity_at: Optional[datetime] = field(default=None)

    @property
    def display_name(self) -> str:
        """Best human-readable name for the user."""
        if self.username:
            return self.username
        names = [n for n in (self.first_name, self.last_name) if n]
        return " ".join(names) or self.user_id
