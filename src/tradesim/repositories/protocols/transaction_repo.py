"""Transaction repository protocol."""

from typing import Protocol

from tradesim.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, account_id: int, transaction: Transaction) -> Transaction:
        """Append a transaction; returns it with txn_id assigned."""
        ...

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List all transactions for an account in insertion order."""
        ...

    def delete_by_account(self, account_id: int) -> int:
        """Delete every transaction of an account; returns the count removed."""
        ...
