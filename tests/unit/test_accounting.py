"""
Unit tests for the pure accounting functions.

Tests cover:
- Weighted-average cost on buys
- Sell reductions and exhaustion
- Realized P/L
- Portfolio valuation with missing prices
- Win rate
"""

from decimal import Decimal

from tradesim.domain.models import Holding
from tradesim.services.accounting import (
    PositionState,
    apply_buy,
    apply_sell,
    percent_of,
    realized_pl,
    value_holdings,
    win_rate,
)


def _holding(symbol: str, quantity: str, avg_cost: str) -> Holding:
    qty, avg = Decimal(quantity), Decimal(avg_cost)
    return Holding(
        user_id="1001",
        symbol=symbol,
        quantity=qty,
        avg_cost=avg,
        total_invested=qty * avg,
    )


class TestApplyBuy:
    def test_first_buy_opens_position_at_price(self):
        state = apply_buy(None, Decimal("10"), Decimal("150"))

        assert state == PositionState(
            quantity=Decimal("10"),
            avg_cost=Decimal("150"),
            total_invested=Decimal("1500"),
        )

    def test_second_buy_blends_average_cost(self):
        """
        GIVEN 10 shares at 150
        WHEN 5 more are bought at 160
        THEN quantity is 15, invested 2300 and the average 153.33333333
        """
        state = apply_buy(None, Decimal("10"), Decimal("150"))
        state = apply_buy(state, Decimal("5"), Decimal("160"))

        assert state.quantity == Decimal("15")
        assert state.total_invested == Decimal("2300")
        assert state.avg_cost == Decimal("153.33333333")

    def test_invested_is_sum_of_costs(self):
        lots = [("3", "10.10"), ("7", "11.25"), ("0.5", "9.99")]
        state = None
        for qty, price in lots:
            state = apply_buy(state, Decimal(qty), Decimal(price))

        expected = sum(Decimal(q) * Decimal(p) for q, p in lots)
        assert state.total_invested == expected
        assert abs(state.avg_cost - expected / state.quantity) < Decimal("0.00000001")

    def test_amounts_are_rounded_to_stored_scale(self):
        """
        GIVEN prices with more than eight decimals
        WHEN they are blended into a position
        THEN average cost and invested amount both carry at most eight decimals
        """
        state = apply_buy(None, Decimal("3"), Decimal("10.123456789"))
        state = apply_buy(state, Decimal("0.7"), Decimal("11.987654321"))

        assert state.total_invested == Decimal("38.76172839")
        assert state.avg_cost == Decimal("10.47614281")
        for amount in (state.avg_cost, state.total_invested):
            assert amount == amount.quantize(Decimal("0.00000001"))


class TestApplySell:
    def test_exact_sell_exhausts_position(self):
        state = PositionState(Decimal("10"), Decimal("150"), Decimal("1500"))

        assert apply_sell(state, Decimal("10")) is None

    def test_partial_sell_keeps_average_and_recomputes_invested(self):
        """
        GIVEN 10 shares at an average of 150
        WHEN 4 are sold
        THEN 6 remain at 150 with 900 invested
        """
        state = PositionState(Decimal("10"), Decimal("150"), Decimal("1500"))

        remaining = apply_sell(state, Decimal("4"))

        assert remaining.quantity == Decimal("6")
        assert remaining.avg_cost == Decimal("150")
        assert remaining.total_invested == Decimal("900")


class TestRealizedPl:
    def test_gain(self):
        assert realized_pl(Decimal("150"), Decimal("160"), Decimal("10")) == Decimal("100")

    def test_loss_is_negative(self):
        assert realized_pl(Decimal("150"), Decimal("140"), Decimal("2")) == Decimal("-20")

    def test_break_even_is_zero(self):
        assert realized_pl(Decimal("150"), Decimal("150"), Decimal("5")) == Decimal("0")


class TestValueHoldings:
    def test_values_holdings_with_prices(self):
        holdings = [_holding("AAPL", "10", "150"), _holding("MSFT", "2", "400")]
        prices = {"AAPL": Decimal("160"), "MSFT": Decimal("380")}

        valuation = value_holdings(holdings, prices)

        aapl, msft = valuation.items
        assert aapl.current_value == Decimal("1600")
        assert aapl.unrealized_pl == Decimal("100")
        assert aapl.unrealized_pl_percent == Decimal("6.67")
        assert msft.unrealized_pl == Decimal("-40")
        assert valuation.total_value == Decimal("2360")
        assert valuation.total_invested == Decimal("2300")
        assert valuation.total_unrealized_pl == Decimal("60")
        assert valuation.total_unrealized_pl_percent == Decimal("2.61")
        assert valuation.unpriced_symbols == []

    def test_holdings_without_price_are_excluded_from_totals(self):
        """
        GIVEN two holdings and a price for only one
        WHEN the portfolio is valued
        THEN totals cover the priced holding only and the other is reported
        """
        holdings = [_holding("AAPL", "10", "150"), _holding("XYZ", "5", "20")]

        valuation = value_holdings(holdings, {"AAPL": Decimal("150")})

        assert [i.symbol for i in valuation.items] == ["AAPL"]
        assert valuation.total_invested == Decimal("1500")
        assert valuation.unpriced_symbols == ["XYZ"]

    def test_empty_portfolio_has_no_percent(self):
        valuation = value_holdings([], {})

        assert valuation.total_value == Decimal("0")
        assert valuation.total_unrealized_pl_percent is None

    def test_zero_invested_percent_is_guarded(self):
        assert percent_of(Decimal("5"), Decimal("0")) is None


class TestWinRate:
    def test_no_trades(self):
        assert win_rate(0, 0) == Decimal("0.0")

    def test_rounded_to_one_decimal(self):
        assert win_rate(3, 1) == Decimal("33.3")
        assert win_rate(4, 2) == Decimal("50.0")
