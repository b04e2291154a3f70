"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    Position in one symbol for one user.

    Invariant: total_invested == quantity * avg_cost. A row only exists
    while quantity > 0.
    """

    user_id: str
    symbol: str
    quantity: Decimal
    avg_cost: Decimal
    total_invested: Decimal
    opened_at: Optional[datetime] = field(default=None)
