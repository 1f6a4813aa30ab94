"""Account repository protocol."""

from typing import Protocol, Optional

from tradesim.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account with its holdings."""
        ...

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account (balance and holdings) by ID."""
        ...

    def update(self, account: Account) -> Account:
        """Replace balance and holdings of an existing account."""
        ...
