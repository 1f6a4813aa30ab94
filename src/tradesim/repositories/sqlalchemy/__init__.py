"""SQLAlchemy repository implementations."""

from tradesim.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    init_db_with_url,
    reset_database,
    Base,
)
from tradesim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradesim.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from tradesim.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "init_db_with_url",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyUnitOfWork",
]
