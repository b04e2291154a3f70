"""Ledger service: balances, holdings and the trade log."""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from tradesim.core.timezone import now_eastern
from tradesim.core.exceptions import (
    ValidationError,
    NotFoundError,
    InsufficientFundsError,
)
from tradesim.domain.models import (
    UserAccount,
    Holding,
    TradeTransaction,
    TradeSide,
)
from tradesim.domain.views import UserStats
from tradesim.repositories.protocols import UnitOfWork
from tradesim.services import accounting
from tradesim.services.accounting import PositionState, ZERO

logger = logging.getLogger(__name__)


@dataclass
class TradeResult:
    """Outcome of an executed trade."""

    transaction: TradeTransaction
    cash_balance: Decimal
    holding: Optional[Holding] = None

    @property
    def profit_loss(self) -> Optional[Decimal]:
        return self.transaction.profit_loss


class LedgerService:
    """
    Service owning accounts, holdings and the transaction log.

    Every mutation runs under a per-user lock and inside one unit of work,
    so either all of its row changes commit or none do.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        initial_balance: Decimal = Decimal("10000.00"),
    ):
        self._uow_factory = uow_factory
        self._initial_balance = initial_balance
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def initial_balance(self) -> Decimal:
        return self._initial_balance

    # Accounts

    def ensure_account(
        self,
        user_id: str,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserAccount:
        """
        Register a user on first contact, otherwise refresh profile and activity.

        New accounts start with the configured initial balance.
        """
        now = now_eastern()
        with self._user_lock(user_id), self._uow_factory() as uow:
            account = uow.accounts.get(user_id, for_update=True)
            if account is None:
                account = uow.accounts.add(
                    UserAccount(
                        user_id=user_id,
                        cash_balance=self._initial_balance,
                        username=username,
                        first_name=first_name,
                        last_name=last_name,
                        registered_at=now,
                        last_activity_at=now,
                    )
                )
                logger.info("Registered user %s with balance %s", user_id, self._initial_balance)
            else:
                account.username = username or account.username
                account.first_name = first_name or account.first_name
                account.last_name = last_name or account.last_name
                account.last_activity_at = now
                account = uow.accounts.update(account)
            uow.commit()
            return account

    def get_account(self, user_id: str) -> UserAccount:
        """Get account by user ID."""
        with self._uow_factory() as uow:
            return self._require_account(uow, user_id)

    def get_balance(self, user_id: str) -> Decimal:
        """Current cash balance."""
        return self.get_account(user_id).cash_balance

    def get_stats(self, user_id: str) -> UserStats:
        """Balance, trade counters and win rate."""
        account = self.get_account(user_id)
        return UserStats(
            user_id=user_id,
            cash_balance=account.cash_balance,
            total_trades=account.total_trades,
            profitable_trades=account.profitable_trades,
            win_rate=accounting.win_rate(account.total_trades, account.profitable_trades),
            registered_at=account.registered_at,
        )

    def reset(self, user_id: str) -> UserAccount:
        """
        Restore the cash balance to the initial balance.

        Holdings, transactions, counters and the watchlist are kept.
        """
        with self._user_lock(user_id), self._uow_factory() as uow:
            account = self._require_account(uow, user_id, for_update=True)
            account.cash_balance = self._initial_balance
            account.last_activity_at = now_eastern()
            account = uow.accounts.update(account)
            uow.commit()
        logger.info("Reset balance of user %s to %s", user_id, self._initial_balance)
        return account

    # Holdings and history

    def get_holdings(self, user_id: str) -> list[Holding]:
        """All holdings of a user, ordered by symbol."""
        with self._uow_factory() as uow:
            return uow.holdings.list_by_user(user_id)

    def get_holding(self, user_id: str, symbol: str) -> Optional[Holding]:
        """Holding for one symbol, if any."""
        with self._uow_factory() as uow:
            return uow.holdings.get(user_id, symbol.upper())

    def list_transactions(self, user_id: str, limit: Optional[int] = None) -> list[TradeTransaction]:
        """Trades of a user, newest first."""
        with self._uow_factory() as uow:
            return uow.transactions.list_by_user(user_id, limit=limit)

    # Trading

    def buy(self, user_id: str, symbol: str, quantity: Decimal, price: Decimal) -> TradeResult:
        """
        Buy quantity shares of symbol at price.

        Raises InsufficientFundsError when the cost exceeds the cash balance.
        """
        symbol = self._validate_trade(symbol, quantity, price)
        price = accounting.to_amount(price)
        cost = accounting.trade_amount(quantity, price)
        now = now_eastern()

        with self._user_lock(user_id), self._uow_factory() as uow:
            account = self._require_account(uow, user_id, for_update=True)
            if cost > account.cash_balance:
                raise InsufficientFundsError(required=cost, available=account.cash_balance)

            existing = uow.holdings.get(user_id, symbol)
            state = accounting.apply_buy(self._position(existing), quantity, price)
            holding = uow.holdings.upsert(
                Holding(
                    user_id=user_id,
                    symbol=symbol,
                    quantity=state.quantity,
                    avg_cost=state.avg_cost,
                    total_invested=state.total_invested,
                    opened_at=existing.opened_at if existing else now,
                )
            )
            transaction = uow.transactions.append(
                TradeTransaction(
                    user_id=user_id,
                    symbol=symbol,
                    side=TradeSide.BUY,
                    quantity=quantity,
                    price=price,
                    total_amount=cost,
                    timestamp=now,
                )
            )

            account.cash_balance -= cost
            account.total_trades += 1
            account.last_activity_at = now
            account = uow.accounts.update(account)
            uow.commit()

        logger.info("User %s bought %s %s at %s", user_id, quantity, symbol, price)
        return TradeResult(transaction=transaction, cash_balance=account.cash_balance, holding=holding)

    def sell(self, user_id: str, symbol: str, quantity: Decimal, price: Decimal) -> Optional[TradeResult]:
        """
        Sell quantity shares of symbol at price.

        Returns None, with nothing changed, when the user holds fewer shares
        than requested. Selling the whole position removes the holding.
        """
        symbol = self._validate_trade(symbol, quantity, price)
        price = accounting.to_amount(price)
        now = now_eastern()

        with self._user_lock(user_id), self._uow_factory() as uow:
            account = self._require_account(uow, user_id, for_update=True)
            existing = uow.holdings.get(user_id, symbol)
            if existing is None or existing.quantity < quantity:
                return None

            profit_loss = accounting.realized_pl(existing.avg_cost, price, quantity)
            state = accounting.apply_sell(self._position(existing), quantity)
            holding: Optional[Holding] = None
            if state is None:
                uow.holdings.delete(user_id, symbol)
            else:
                holding = uow.holdings.upsert(
                    Holding(
                        user_id=user_id,
                        symbol=symbol,
                        quantity=state.quantity,
                        avg_cost=state.avg_cost,
                        total_invested=state.total_invested,
                        opened_at=existing.opened_at,
                    )
                )

            proceeds = accounting.trade_amount(quantity, price)
            transaction = uow.transactions.append(
                TradeTransaction(
                    user_id=user_id,
                    symbol=symbol,
                    side=TradeSide.SELL,
                    quantity=quantity,
                    price=price,
                    total_amount=proceeds,
                    profit_loss=profit_loss,
                    timestamp=now,
                )
            )

            account.cash_balance += proceeds
            account.total_trades += 1
            if profit_loss > ZERO:
                account.profitable_trades += 1
            account.last_activity_at = now
            account = uow.accounts.update(account)
            uow.commit()

        logger.info(
            "User %s sold %s %s at %s (P/L %s)", user_id, quantity, symbol, price, profit_loss
        )
        return TradeResult(transaction=transaction, cash_balance=account.cash_balance, holding=holding)

    # Helpers

    def _user_lock(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    @staticmethod
    def _require_account(uow: UnitOfWork, user_id: str, for_update: bool = False) -> UserAccount:
        account = uow.accounts.get(user_id, for_update=for_update)
        if account is None:
            raise NotFoundError("Account", user_id)
        return account

    @staticmethod
    def _position(holding: Optional[Holding]) -> Optional[PositionState]:
        if holding is None:
            return None
        return PositionState(
            quantity=holding.quantity,
            avg_cost=holding.avg_cost,
            total_invested=holding.total_invested,
        )

    @staticmethod
    def _validate_trade(symbol: str, quantity: Decimal, price: Decimal) -> str:
        if not symbol or not symbol.strip():
            raise ValidationError("Trade requires a symbol")
        if quantity is None or not quantity.is_finite() or quantity <= ZERO:
            raise ValidationError("Trade requires quantity > 0")
        if not accounting.fits_amount_scale(quantity):
            raise ValidationError(
                f"Quantity supports at most {accounting.AMOUNT_PLACES} decimal places"
            )
        if price is None or not price.is_finite() or accounting.to_amount(price) <= ZERO:
            raise ValidationError("Trade requires price > 0")
        return symbol.strip().upper()
