"""SQLAlchemy implementation of HoldingRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from tradesim.domain.models import Holding
from tradesim.repositories.sqlalchemy.orm_models import HoldingORM, to_decimal


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str) -> Optional[Holding]:
        """Get the holding for a user and symbol."""
        orm_holding = self._find(user_id, symbol)
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List all holdings of a user ordered by symbol."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.user_id == user_id)
            .order_by(HoldingORM.symbol)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def upsert(self, holding: Holding) -> Holding:
        """Insert or update a holding."""
        orm_holding = self._find(holding.user_id, holding.symbol)

        if orm_holding:
            orm_holding.quantity = holding.quantity
            orm_holding.avg_cost = holding.avg_cost
            orm_holding.total_invested = holding.total_invested
        else:
            orm_holding = HoldingORM(
                user_id=holding.user_id,
                symbol=holding.symbol,
                quantity=holding.quantity,
                avg_cost=holding.avg_cost,
                total_invested=holding.total_invested,
                opened_at=holding.opened_at,
            )
            self._db.add(orm_holding)

        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, user_id: str, symbol: str) -> None:
        """Remove a holding row."""
        self._db.query(HoldingORM).filter(
            HoldingORM.user_id == user_id,
            HoldingORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def _find(self, user_id: str, symbol: str) -> Optional[HoldingORM]:
        return (
            self._db.query(HoldingORM)
            .filter(
                HoldingORM.user_id == user_id,
                HoldingORM.symbol == symbol,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM holding to domain model."""
        return Holding(
            user_id=orm.user_id,
            symbol=orm.symbol,
            quantity=to_decimal(orm.quantity),
            avg_cost=to_decimal(orm.avg_cost),
            total_invested=to_decimal(orm.total_invested),
            opened_at=orm.opened_at,
        )
