"""View models for portfolio and statistics outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class HoldingValuation:
    """A holding priced at the current market price."""

    symbol: str
    quantity: Decimal
    avg_cost: Decimal
    total_invested: Decimal
    current_price: Decimal
    current_value: Decimal
    unrealized_pl: Decimal
    unrealized_pl_percent: Optional[Decimal] = None


@dataclass
class PortfolioValuation:
    """
    Valuation of a set of holdings.

    Totals only include holdings with a known price; the rest are listed in
    unpriced_symbols.
    """

    items: list[HoldingValuation] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    total_unrealized_pl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_unrealized_pl_percent: Optional[Decimal] = None
    unpriced_symbols: list[str] = field(default_factory=list)


@dataclass
class PortfolioView:
    """Portfolio valuation together with the user's cash."""

    user_id: str
    cash_balance: Decimal
    valuation: PortfolioValuation
    holdings_count: int = 0
    as_of: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.holdings_count == 0


@dataclass
class UserStats:
    """Trading statistics for a user."""

    user_id: str
    cash_balance: Decimal
    total_trades: int
    profitable_trades: int
    win_rate: Decimal
    registered_at: Optional[datetime] = None
