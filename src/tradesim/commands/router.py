"""Dispatch of chat commands to handlers."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from tradesim.core.exceptions import (
    AppError,
    InsufficientFundsError,
    QuoteUnavailableError,
    SymbolNotFoundError,
    ValidationError,
)
from tradesim.commands import formatters
from tradesim.commands.parser import (
    ParsedCommand,
    parse_command,
    parse_quantity,
    parse_symbol,
)
from tradesim.providers.market_data_provider import DAILY_INTERVAL, INTRADAY_INTERVALS
from tradesim.services.analysis_service import AnalysisService
from tradesim.services.ledger_service import LedgerService
from tradesim.services.market_data_service import MarketDataService
from tradesim.services.watchlist_service import WatchlistService

logger = logging.getLogger(__name__)

CHART_POINTS = 10

Handler = Callable[[str, ParsedCommand], str]


@dataclass(frozen=True)
class UserProfile:
    """Profile fields sent along with a chat message."""

    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class CommandRouter:
    """
    Turns (user_id, command text) into a reply text.

    The account is registered or refreshed before every command. Each
    command is isolated: errors become a reply and never escape handle().
    """

    def __init__(
        self,
        ledger: LedgerService,
        market_data: MarketDataService,
        watchlist: WatchlistService,
        analysis: AnalysisService,
        history_limit: int = 10,
        search_limit: int = 5,
    ):
        self._ledger = ledger
        self._market_data = market_data
        self._watchlist = watchlist
        self._analysis = analysis
        self._history_limit = history_limit
        self._search_limit = search_limit

        self._handlers: dict[str, Handler] = {
            "start": self._start,
            "help": self._help,
            "price": self._price,
            "info": self._info,
            "buy": self._buy,
            "sell": self._sell,
            "portfolio": self._portfolio,
            "balance": self._balance,
            "history": self._history,
            "watch": self._watch,
            "watchlist": self._watchlist_cmd,
            "stats": self._stats,
            "search": self._search,
            "top": self._top,
            "reset": self._reset,
            "chart": self._chart,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    def handle(self, user_id: str, text: str, profile: Optional[UserProfile] = None) -> str:
        """Run one command for a user and return the reply."""
        profile = profile or UserProfile()
        command = parse_command(text)

        try:
            self._ledger.ensure_account(
                user_id,
                username=profile.username,
                first_name=profile.first_name,
                last_name=profile.last_name,
            )
            if command is None:
                return formatters.unknown_command()

            handler = self._handlers.get(command.name)
            if handler is None:
                return formatters.unknown_command()
            return handler(user_id, command)

        except InsufficientFundsError as e:
            return formatters.insufficient_funds(e)
        except QuoteUnavailableError as e:
            logger.warning("Quote lookup failed for %s: %s", user_id, e.message)
            return formatters.quote_unavailable(e)
        except AppError as e:
            return formatters.error(e.message)
        except Exception:
            logger.exception("Command %r failed for user %s", text, user_id)
            return formatters.internal_error()

    # Informational

    def _start(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.welcome(self._ledger.initial_balance)

    def _help(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.help_text()

    def _top(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.top_list()

    # Market data

    def _price(self, user_id: str, command: ParsedCommand) -> str:
        if not command.args:
            return formatters.usage("/price AAPL", "/price SYMBOL")
        return formatters.quote(self._market_data.get_quote(parse_symbol(command.args[0])))

    def _info(self, user_id: str, command: ParsedCommand) -> str:
        if not command.args:
            return formatters.usage("/info AAPL", "/info SYMBOL")
        return formatters.overview(self._market_data.company_overview(parse_symbol(command.args[0])))

    def _search(self, user_id: str, command: ParsedCommand) -> str:
        if not command.args:
            return formatters.usage("/search Apple", "/search KEYWORDS")
        keywords = command.rest
        matches = self._market_data.search(keywords)
        return formatters.search_results(keywords, matches, self._search_limit)

    def _chart(self, user_id: str, command: ParsedCommand) -> str:
        if not command.args:
            return formatters.usage("/chart AAPL 5min", "/chart SYMBOL [INTERVAL]")
        symbol = parse_symbol(command.args[0])
        interval = (command.arg(1) or DAILY_INTERVAL).lower()
        if interval != DAILY_INTERVAL and interval not in INTRADAY_INTERVALS:
            allowed = ", ".join((DAILY_INTERVAL,) + INTRADAY_INTERVALS)
            raise ValidationError(f"Unsupported interval: {interval}. Use one of {allowed}")
        bars = self._market_data.series(symbol, interval)
        return formatters.chart(symbol, interval, bars, CHART_POINTS)

    # Trading

    def _buy(self, user_id: str, command: ParsedCommand) -> str:
        if len(command.args) < 2:
            return formatters.usage("/buy AAPL 10", "/buy SYMBOL QUANTITY")
        symbol = parse_symbol(command.args[0])
        quantity = parse_quantity(command.args[1])

        price = self._market_data.current_price(symbol)
        result = self._ledger.buy(user_id, symbol, quantity, price)
        return formatters.buy_receipt(result)

    def _sell(self, user_id: str, command: ParsedCommand) -> str:
        if len(command.args) < 2:
            return formatters.usage("/sell AAPL 5", "/sell SYMBOL QUANTITY")
        symbol = parse_symbol(command.args[0])
        quantity = parse_quantity(command.args[1])

        price = self._market_data.current_price(symbol)
        result = self._ledger.sell(user_id, symbol, quantity, price)
        if result is None:
            return formatters.sell_failed(symbol)
        return formatters.sell_receipt(result)

    def _reset(self, user_id: str, command: ParsedCommand) -> str:
        account = self._ledger.reset(user_id)
        return formatters.reset_done(account.cash_balance)

    # Account views

    def _balance(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.balance(self._ledger.get_balance(user_id))

    def _portfolio(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.portfolio(self._analysis.portfolio(user_id))

    def _history(self, user_id: str, command: ParsedCommand) -> str:
        transactions = self._ledger.list_transactions(user_id, limit=self._history_limit)
        return formatters.history(transactions)

    def _stats(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.stats(self._ledger.get_stats(user_id))

    # Watchlist

    def _watch(self, user_id: str, command: ParsedCommand) -> str:
        if not command.args:
            return formatters.usage("/watch TSLA", "/watch SYMBOL")
        symbol = parse_symbol(command.args[0])
        try:
            self._market_data.current_price(symbol)
        except SymbolNotFoundError:
            return formatters.invalid_symbol()
        added = self._watchlist.add(user_id, symbol)
        return formatters.watch_added(symbol, added)

    def _watchlist_cmd(self, user_id: str, command: ParsedCommand) -> str:
        return formatters.watchlist(self._watchlist.list_symbols(user_id))
