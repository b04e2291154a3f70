"""
Unit tests for CommandRouter.

Tests cover:
- Registration on first message
- Trading commands end to end against the in-memory store
- Market data commands
- Error isolation: every failure becomes a reply
"""

from decimal import Decimal

import pytest

from tradesim.commands import UserProfile
from tradesim.core.exceptions import RateLimitedError, QuoteTransportError
from tests.conftest import INITIAL_BALANCE

USER = "2002"


class TestRegistration:
    def test_first_message_registers_user(self, command_router, ledger_service):
        """
        GIVEN an unknown user
        WHEN they send /start
        THEN an account with the starting balance exists and a welcome is sent
        """
        reply = command_router.handle(USER, "/start", UserProfile(username="bob"))

        assert "Welcome" in reply
        assert "$10,000.00" in reply
        account = ledger_service.get_account(USER)
        assert account.cash_balance == INITIAL_BALANCE
        assert account.username == "bob"

    def test_unknown_command_gets_hint(self, command_router):
        assert "Use /help" in command_router.handle(USER, "/dance")

    def test_blank_message_gets_hint(self, command_router):
        assert "Use /help" in command_router.handle(USER, "   ")

    def test_help_lists_commands(self, command_router):
        reply = command_router.handle(USER, "/help")

        for name in ["/price", "/buy", "/sell", "/portfolio", "/history", "/watch", "/chart"]:
            assert name in reply


class TestTrading:
    def test_buy_at_current_price(self, command_router, ledger_service):
        reply = command_router.handle(USER, "/buy aapl 10")

        assert "PURCHASE COMPLETED" in reply
        assert "Quantity: 10" in reply
        assert "Total: $1,500.00" in reply
        assert "New balance: $8,500.00" in reply
        assert ledger_service.get_holding(USER, "AAPL").quantity == Decimal("10")

    def test_buy_insufficient_funds(self, command_router, ledger_service):
        reply = command_router.handle(USER, "/buy MSFT 100")

        assert "Insufficient funds" in reply
        assert "Total cost: $38,000.00" in reply
        assert "Missing: $28,000.00" in reply
        assert ledger_service.get_balance(USER) == INITIAL_BALANCE

    def test_buy_usage(self, command_router):
        assert "Usage: /buy SYMBOL QUANTITY" in command_router.handle(USER, "/buy AAPL")

    @pytest.mark.parametrize("qty", ["abc", "0", "-2", "0.000000001"])
    def test_buy_rejects_bad_quantity(self, command_router, deterministic_provider, qty):
        reply = command_router.handle(USER, f"/buy AAPL {qty}")

        assert reply.startswith("❌")
        assert deterministic_provider.count("quote") == 0

    def test_sell_round_trip(self, command_router, deterministic_provider, fake_clock):
        """
        GIVEN 10 AAPL bought at 150
        WHEN the price moves to 160 and all 10 are sold
        THEN the sale reply shows proceeds, P/L and new balance
        """
        command_router.handle(USER, "/buy AAPL 10")
        fake_clock.advance(61)
        deterministic_provider.set_price("AAPL", Decimal("160.00"))

        reply = command_router.handle(USER, "/sell AAPL 10")

        assert "SALE COMPLETED" in reply
        assert "Proceeds: $1,600.00" in reply
        assert "Realized P/L: $100.00" in reply
        assert "New balance: $10,100.00" in reply

    def test_sell_without_holding(self, command_router):
        reply = command_router.handle(USER, "/sell TSLA 1")

        assert "SALE FAILED" in reply
        assert "TSLA" in reply

    def test_reset(self, command_router, ledger_service):
        command_router.handle(USER, "/buy AAPL 10")

        reply = command_router.handle(USER, "/reset")

        assert "New balance: $10,000.00" in reply
        assert ledger_service.get_holding(USER, "AAPL").quantity == Decimal("10")


class TestAccountViews:
    def test_balance(self, command_router):
        assert "$10,000.00" in command_router.handle(USER, "/balance")

    def test_empty_portfolio(self, command_router):
        assert "portfolio is empty" in command_router.handle(USER, "/portfolio")

    def test_portfolio_valuation(self, command_router, deterministic_provider, fake_clock):
        command_router.handle(USER, "/buy AAPL 10")
        fake_clock.advance(61)
        deterministic_provider.set_price("AAPL", Decimal("165.00"))

        reply = command_router.handle(USER, "/portfolio")

        assert "📈 AAPL" in reply
        assert "Value: $1,650.00" in reply
        assert "P/L: $150.00 (10.00%)" in reply
        assert "Available cash: $8,500.00" in reply

    def test_portfolio_uses_stale_price_when_provider_fails(
        self, command_router, deterministic_provider, fake_clock
    ):
        command_router.handle(USER, "/buy AAPL 10")
        fake_clock.advance(3600)
        deterministic_provider.failure = QuoteTransportError("AAPL", "down")

        reply = command_router.handle(USER, "/portfolio")

        assert "Value: $1,500.00" in reply

    def test_history_newest_first(self, command_router):
        command_router.handle(USER, "/buy AAPL 1")
        command_router.handle(USER, "/buy MSFT 1")

        reply = command_router.handle(USER, "/history")

        assert reply.index("BUY MSFT") < reply.index("BUY AAPL")

    def test_history_empty(self, command_router):
        assert command_router.handle(USER, "/history") == "📜 No transactions yet."

    def test_stats(self, command_router):
        command_router.handle(USER, "/buy AAPL 2")

        reply = command_router.handle(USER, "/stats")

        assert "Total trades: 1" in reply
        assert "Win rate: 0.0%" in reply


class TestMarketCommands:
    def test_price_then_cached_price(self, command_router, deterministic_provider):
        first = command_router.handle(USER, "/price AAPL")
        second = command_router.handle(USER, "/price AAPL")

        assert "Change:" in first
        assert "Cached data" in second
        assert deterministic_provider.count("quote") == 1

    def test_price_unknown_symbol(self, command_router):
        assert "No data found for ZZZZ" in command_router.handle(USER, "/price ZZZZ")

    def test_price_rate_limited(self, command_router, deterministic_provider):
        deterministic_provider.failure = RateLimitedError("AAPL", "quota")

        assert "API limit reached" in command_router.handle(USER, "/price AAPL")

    def test_info(self, command_router):
        reply = command_router.handle(USER, "/info AAPL")

        assert "Apple Inc (AAPL)" in reply
        assert "$2.95T" in reply
        assert "..." in reply

    def test_search_joins_keywords(self, command_router, deterministic_provider):
        reply = command_router.handle(USER, "/search apple inc")

        assert "AAPL - Apple Inc." in reply
        assert ("search", "apple inc") in deterministic_provider.calls

    def test_top(self, command_router):
        reply = command_router.handle(USER, "/top")

        assert "AAPL" in reply
        assert "BA" in reply

    def test_chart_daily(self, command_router):
        reply = command_router.handle(USER, "/chart AAPL")

        assert "AAPL (daily, last 10)" in reply
        assert "Low: $155.00 | High: $164.00" in reply

    def test_chart_rejects_unknown_interval(self, command_router, deterministic_provider):
        reply = command_router.handle(USER, "/chart AAPL 2min")

        assert "Unsupported interval" in reply
        assert deterministic_provider.count("series") == 0


class TestWatchlist:
    def test_watch_validates_symbol(self, command_router, watchlist_service):
        assert "Invalid or unknown symbol" in command_router.handle(USER, "/watch ZZZZ")
        assert watchlist_service.list_symbols(USER) == []

    def test_watch_twice_is_idempotent(self, command_router, watchlist_service):
        first = command_router.handle(USER, "/watch tsla")
        second = command_router.handle(USER, "/watch TSLA")

        assert "added to your watchlist" in first
        assert "already in your watchlist" in second
        assert watchlist_service.list_symbols(USER) == ["TSLA"]
        assert "📌 TSLA" in command_router.handle(USER, "/watchlist")


class TestIsolation:
    def test_unexpected_error_becomes_reply(self, command_router, ledger_service, monkeypatch):
        """
        GIVEN a handler that blows up with an unexpected exception
        WHEN the command runs
        THEN a generic error reply is returned instead of raising
        """

        def boom(user_id):
            raise RuntimeError("boom")

        monkeypatch.setattr(ledger_service, "get_balance", boom)

        reply = command_router.handle(USER, "/balance")

        assert "Something went wrong" in reply
        assert "Use /help" in command_router.handle(USER, "/nope")
