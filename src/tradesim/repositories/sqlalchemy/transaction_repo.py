"""SQLAlchemy implementation of TransactionRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from tradesim.domain.models import TradeTransaction
from tradesim.repositories.sqlalchemy.orm_models import TradeTransactionORM, to_decimal


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed trade log. Rows are inserted, never updated or deleted."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, transaction: TradeTransaction) -> TradeTransaction:
        """Record an executed trade."""
        orm_txn = TradeTransactionORM(
            user_id=transaction.user_id,
            symbol=transaction.symbol,
            side=transaction.side,
            quantity=transaction.quantity,
            price=transaction.price,
            total_amount=transaction.total_amount,
            profit_loss=transaction.profit_loss,
            timestamp=transaction.timestamp,
        )
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[TradeTransaction]:
        """List a user's trades, newest first."""
        query = (
            self._db.query(TradeTransactionORM)
            .filter(TradeTransactionORM.user_id == user_id)
            .order_by(TradeTransactionORM.timestamp.desc(), TradeTransactionORM.txn_id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count_by_user(self, user_id: str) -> int:
        """Number of trades recorded for a user."""
        return (
            self._db.query(func.count(TradeTransactionORM.txn_id))
            .filter(TradeTransactionORM.user_id == user_id)
            .scalar()
        ) or 0

    @staticmethod
    def _to_domain(orm: TradeTransactionORM) -> TradeTransaction:
        """Convert ORM model to domain model."""
        return TradeTransaction(
            txn_id=orm.txn_id,
            user_id=orm.user_id,
            symbol=orm.symbol,
            side=orm.side,
            quantity=to_decimal(orm.quantity),
            price=to_decimal(orm.price),
            total_amount=to_decimal(orm.total_amount),
            profit_loss=to_decimal(orm.profit_loss) if orm.profit_loss is not None else None,
            timestamp=orm.timestamp,
        )
