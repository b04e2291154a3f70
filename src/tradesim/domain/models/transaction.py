"""Trade transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import TradeSide


@dataclass(frozen=True)
class TradeTransaction:
    """
    Append-only record of an executed trade.

    profit_loss is only set for SELL (realized against average cost).
    """

    user_id: str
    symbol: str
    side: TradeSide
    quantity: Decimal
    price: Decimal
    total_amount: Decimal
    timestamp: datetime
    profit_loss: Optional[Decimal] = None
    txn_id: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", TradeSide(self.side))
