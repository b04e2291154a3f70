"""Core utilities and shared functionality."""

from tradesim.core.timezone import (
    now_eastern,
    to_eastern,
    parse_market_timestamp,
    format_timestamp,
    EASTERN_TZ,
)
from tradesim.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    PersistenceError,
    QuoteFailureReason,
    QuoteUnavailableError,
    RateLimitedError,
    SymbolNotFoundError,
    QuoteTransportError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_market_timestamp",
    "format_timestamp",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientFundsError",
    "InsufficientHoldingsError",
    "PersistenceError",
    "QuoteFailureReason",
    "QuoteUnavailableError",
    "RateLimitedError",
    "SymbolNotFoundError",
    "QuoteTransportError",
]
