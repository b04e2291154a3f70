"""
Pure accounting functions.

Weighted-average cost on buys, realized profit/loss on sells and portfolio
valuation against current prices. Nothing here touches storage.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from tradesim.domain.models import Holding
from tradesim.domain.views import HoldingValuation, PortfolioValuation

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Scale of every quantity, price and cash column
AMOUNT_PLACES = 8
AMOUNT_QUANT = Decimal(1).scaleb(-AMOUNT_PLACES)
PERCENT_QUANT = Decimal("0.01")


@dataclass(frozen=True)
class PositionState:
    """Quantity and cost basis of one position."""

    quantity: Decimal
    avg_cost: Decimal
    total_invested: Decimal


def to_amount(value: Decimal) -> Decimal:
    """Round a money amount to the stored scale."""
    return value.quantize(AMOUNT_QUANT)


def fits_amount_scale(value: Decimal) -> bool:
    """True when value has no more decimal places than the columns store."""
    return value.normalize().as_tuple().exponent >= -AMOUNT_PLACES


def trade_amount(quantity: Decimal, price: Decimal) -> Decimal:
    """Cash moved by a trade of quantity shares at price."""
    return to_amount(quantity * price)


def apply_buy(current: Optional[PositionState], quantity: Decimal, price: Decimal) -> PositionState:
    """Blend a purchase into a position using weighted-average cost."""
    price = to_amount(price)
    cost = trade_amount(quantity, price)
    if current is None:
        return PositionState(quantity=quantity, avg_cost=price, total_invested=cost)

    new_quantity = current.quantity + quantity
    new_invested = current.total_invested + cost
    return PositionState(
        quantity=new_quantity,
        avg_cost=to_amount(new_invested / new_quantity),
        total_invested=to_amount(new_invested),
    )


def apply_sell(current: PositionState, quantity: Decimal) -> Optional[PositionState]:
    """
    Remove sold shares from a position.

    Returns None when the position is exhausted. The average cost of the
    remaining shares is unchanged and total_invested is recomputed from it.
    """
    remaining = current.quantity - quantity
    if remaining == ZERO:
        return None
    return PositionState(
        quantity=remaining,
        avg_cost=current.avg_cost,
        total_invested=to_amount(remaining * current.avg_cost),
    )


def realized_pl(avg_cost: Decimal, price: Decimal, quantity: Decimal) -> Decimal:
    """Profit or loss booked when selling quantity at price."""
    return to_amount((price - avg_cost) * quantity)


def percent_of(part: Decimal, whole: Decimal) -> Optional[Decimal]:
    """part / whole * 100 rounded to cents, None when whole is zero."""
    if whole == ZERO:
        return None
    return (part / whole * HUNDRED).quantize(PERCENT_QUANT)


def win_rate(total_trades: int, profitable_trades: int) -> Decimal:
    """Share of profitable trades in percent; 0 with no trades."""
    if total_trades <= 0:
        return Decimal("0.0")
    return (Decimal(profitable_trades) * HUNDRED / Decimal(total_trades)).quantize(Decimal("0.1"))


def value_holdings(
    holdings: Iterable[Holding],
    prices: Mapping[str, Decimal],
) -> PortfolioValuation:
    """
    Value holdings at current prices.

    Holdings without a price are left out of the totals and reported in
    unpriced_symbols.
    """
    valuation = PortfolioValuation()

    for holding in holdings:
        price = prices.get(holding.symbol)
        if price is None:
            valuation.unpriced_symbols.append(holding.symbol)
            continue

        current_value = holding.quantity * price
        unrealized = current_value - holding.total_invested
        valuation.items.append(
            HoldingValuation(
                symbol=holding.symbol,
                quantity=holding.quantity,
                avg_cost=holding.avg_cost,
                total_invested=holding.total_invested,
                current_price=price,
                current_value=current_value,
                unrealized_pl=unrealized,
                unrealized_pl_percent=percent_of(unrealized, holding.total_invested),
            )
        )
        valuation.total_value += current_value
        valuation.total_invested += holding.total_invested

    valuation.total_unrealized_pl = valuation.total_value - valuation.total_invested
    valuation.total_unrealized_pl_percent = percent_of(
        valuation.total_unrealized_pl, valuation.total_invested
    )
    return valuation
