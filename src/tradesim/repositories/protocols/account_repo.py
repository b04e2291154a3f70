"""Account repository protocol."""

from typing import Protocol, Optional

from tradesim.domain.models import UserAccount


class AccountRepository(Protocol):
    """Interface for user account data access."""

    def add(self, account: UserAccount) -> UserAccount:
        """Persist a new account."""
        ...

    def get(self, user_id: str, for_update: bool = False) -> Optional[UserAccount]:
        """Retrieve account by user ID, optionally locking the row."""
        ...

    def update(self, account: UserAccount) -> UserAccount:
        """Write balance, counters and profile fields of an existing account."""
        ...
