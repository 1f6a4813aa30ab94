"""Unit of work protocol grouping repositories under one commit."""

from typing import Protocol

from tradesim.repositories.protocols.account_repo import AccountRepository
from tradesim.repositories.protocols.transaction_repo import TransactionRepository


class UnitOfWork(Protocol):
    """
    One storage transaction spanning account and ledger writes.

    Used as a context manager: leaving the block without commit() rolls
    back everything done through the repositories.
    """

    accounts: AccountRepository
    transactions: TransactionRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        """Make all changes durable."""
        ...

    def rollback(self) -> None:
        """Discard uncommitted changes."""
        ...
