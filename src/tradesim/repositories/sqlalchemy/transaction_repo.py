"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal

from sqlalchemy.orm import Session

from tradesim.core.timezone import to_utc
from tradesim.domain.models import Transaction
from tradesim.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account_id: int, transaction: Transaction) -> Transaction:
        """Append a transaction; txn_id is assigned on flush."""
        orm_txn = self._to_orm(account_id, transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List all transactions for an account, oldest first."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .order_by(TransactionORM.txn_id)
        )
        return [self._to_domain(t) for t in query.all()]

    def delete_by_account(self, account_id: int) -> int:
        """Delete every transaction of an account."""
        deleted = self._db.query(TransactionORM).filter(
            TransactionORM.account_id == account_id
        ).delete(synchronize_session=False)
        self._db.flush()
        return deleted

    @staticmethod
    def _to_orm(account_id: int, txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            account_id=account_id,
            symbol=txn.symbol,
            amount=txn.amount,
            unit_price=txn.unit_price,
            total_value=txn.total_value,
            side=txn.side,
            timestamp=txn.timestamp,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            symbol=orm.symbol,
            amount=Decimal(str(orm.amount)),
            unit_price=Decimal(str(orm.unit_price)),
            total_value=Decimal(str(orm.total_value)),
            side=orm.side,
            timestamp=to_utc(orm.timestamp),
        )
