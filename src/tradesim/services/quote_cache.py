"""In-memory last-known price per symbol with a freshness window."""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

DEFAULT_TTL_SECONDS = 60


@dataclass(frozen=True)
class CachedPrice:
    """Price with the monotonic time it was fetched at."""

    symbol: str
    price: Decimal
    fetched_at: float


class QuoteCache:
    """
    Price cache with read-time expiry.

    get() only answers while now - fetched_at <= ttl; stale entries are kept
    so peek() can still serve them as a fallback. Entries are never evicted
    for age. With max_entries set, the least recently written symbol is
    dropped once the bound is exceeded.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CachedPrice]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, symbol: str) -> Optional[Decimal]:
        """Return the cached price if still fresh, else None."""
        with self._lock:
            entry = self._entries.get(symbol)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at > self._ttl:
            return None
        return entry.price

    def peek(self, symbol: str) -> Optional[Decimal]:
        """Return the last known price regardless of freshness."""
        with self._lock:
            entry = self._entries.get(symbol)
        return entry.price if entry else None

    def put(self, symbol: str, price: Decimal) -> None:
        """Store a price with a fresh timestamp, replacing any previous entry."""
        with self._lock:
            self._entries[symbol] = CachedPrice(symbol=symbol, price=price, fetched_at=self._clock())
            self._entries.move_to_end(symbol)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
