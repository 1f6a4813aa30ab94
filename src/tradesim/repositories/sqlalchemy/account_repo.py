"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tradesim.domain.models import Account
from tradesim.repositories.sqlalchemy.orm_models import AccountORM, HoldingORM


class SqlAlchemyAccountRepository:
    """
    SQLAlchemy-backed account repository.

    Writes are flushed, not committed; the surrounding unit of work decides.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account with its holdings."""
        orm_account = AccountORM(
            account_id=account.account_id,
            balance=account.balance,
            holdings=[
                HoldingORM(symbol=symbol, quantity=quantity)
                for symbol, quantity in account.holdings.items()
            ],
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def update(self, account: Account) -> Account:
        """Replace balance and holdings of an existing account."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account.account_id
        ).first()
        if not orm_account:
            raise ValueError(f"Account not found: {account.account_id}")

        orm_account.balance = account.balance

        existing = {h.symbol: h for h in orm_account.holdings}
        for symbol, holding in existing.items():
            if symbol not in account.holdings:
                orm_account.holdings.remove(holding)
        for symbol, quantity in account.holdings.items():
            if symbol in existing:
                existing[symbol].quantity = quantity
            else:
                orm_account.holdings.append(HoldingORM(symbol=symbol, quantity=quantity))

        self._db.flush()
        return self._to_domain(orm_account)

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            balance=Decimal(str(orm.balance)),
            holdings={h.symbol: Decimal(str(h.quantity)) for h in orm.holdings},
        )
