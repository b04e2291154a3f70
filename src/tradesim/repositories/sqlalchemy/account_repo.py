"""SQLAlchemy implementation of AccountRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from tradesim.domain.models import UserAccount
from tradesim.repositories.sqlalchemy.orm_models import UserAccountORM, to_decimal


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository. Never commits; the unit of work does."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, account: UserAccount) -> UserAccount:
        """Persist a new account."""
        orm_account = UserAccountORM(
            user_id=account.user_id,
            username=account.username,
            first_name=account.first_name,
            last_name=account.last_name,
            cash_balance=account.cash_balance,
            total_trades=account.total_trades,
            profitable_trades=account.profitable_trades,
            registered_at=account.registered_at,
            last_activity_at=account.last_activity_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get(self, user_id: str, for_update: bool = False) -> Optional[UserAccount]:
        """Retrieve account by user ID."""
        query = self._db.query(UserAccountORM).filter(UserAccountORM.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        orm_account = query.first()
        return self._to_domain(orm_account) if orm_account else None

    def update(self, account: UserAccount) -> UserAccount:
        """Update an existing account."""
        orm_account = self._db.query(UserAccountORM).filter(
            UserAccountORM.user_id == account.user_id
        ).first()
        if not orm_account:
            raise ValueError(f"Account not found: {account.user_id}")

        orm_account.username = account.username
        orm_account.first_name = account.first_name
        orm_account.last_name = account.last_name
        orm_account.cash_balance = account.cash_balance
        orm_account.total_trades = account.total_trades
        orm_account.profitable_trades = account.profitable_trades
        orm_account.last_activity_at = account.last_activity_at
        self._db.flush()
        return self._to_domain(orm_account)

    @staticmethod
    def _to_domain(orm: UserAccountORM) -> UserAccount:
        """Convert ORM model to domain model."""
        return UserAccount(
            user_id=orm.user_id,
            username=orm.username,
            first_name=orm.first_name,
            last_name=orm.last_name,
            cash_balance=to_decimal(orm.cash_balance),
            total_trades=orm.total_trades or 0,
            profitable_trades=orm.profitable_trades or 0,
            registered_at=orm.registered_at,
            last_activity_at=orm.last_activity_at,
        )
