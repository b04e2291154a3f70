"""Application-level exceptions."""

from enum import Enum


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientFundsError(AppError):
    """Raised when a purchase costs more than the available cash."""

    def __init__(self, required, available):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient funds: required {required}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientHoldingsError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested, available):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_HOLDINGS",
        )


class PersistenceError(AppError):
    """Raised when the store cannot complete an operation."""

    def __init__(self, message: str = "Storage is temporarily unavailable"):
        super().__init__(message, code="PERSISTENCE_FAILURE")


class QuoteFailureReason(str, Enum):
    """Why a market data lookup failed."""

    RATE_LIMITED = "RATE_LIMITED"
    NOT_FOUND = "NOT_FOUND"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


class QuoteUnavailableError(AppError):
    """Raised when market data for a symbol cannot be obtained."""

    reason = QuoteFailureReason.TRANSPORT_FAILURE

    def __init__(self, symbol: str, detail: str = ""):
        self.symbol = symbol
        self.detail = detail
        message = f"Market data unavailable for {symbol}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code=self.reason.value)


class RateLimitedError(QuoteUnavailableError):
    """Upstream quota exhausted."""

    reason = QuoteFailureReason.RATE_LIMITED


class SymbolNotFoundError(QuoteUnavailableError):
    """Unknown symbol or empty data set."""

    reason = QuoteFailureReason.NOT_FOUND


class QuoteTransportError(QuoteUnavailableError):
    """Network, timeout or parse failure."""

    reason = QuoteFailureReason.TRANSPORT_FAILURE
