"""SQLAlchemy unit of work: one session, one commit."""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from tradesim.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradesim.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository


class SqlAlchemyUnitOfWork:
    """
    Opens a session on enter and closes it on exit.

    Anything not committed before exit is rolled back, including when the
    block raises.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.accounts = SqlAlchemyAccountRepository(self._session)
        self.transactions = SqlAlchemyTransactionRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
