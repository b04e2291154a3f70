"""Watchlist domain model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class WatchlistEntry:
    """Symbol a user tracks without holding a position."""

    user_id: str
    symbol: str
    added_at: Optional[datetime] = None
