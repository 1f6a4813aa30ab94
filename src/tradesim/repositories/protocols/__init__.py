"""Repository protocol definitions (interfaces)."""

from tradesim.repositories.protocols.account_repo import AccountRepository
from tradesim.repositories.protocols.transaction_repo import TransactionRepository
from tradesim.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "UnitOfWork",
]
