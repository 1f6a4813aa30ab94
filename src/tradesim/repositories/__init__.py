"""Repository layer - data access abstractions and implementations."""

from tradesim.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "UnitOfWork",
]
