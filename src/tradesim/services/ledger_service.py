"""Ledger service: the account's balance, holdings and trade history."""

import logging
import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Callable, Iterator, Optional

from tradesim.core.exceptions import AccountNotFoundError
from tradesim.core.precision import STORAGE_SCALE, fits_scale
from tradesim.domain.models import Account, Transaction
from tradesim.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_ID = 1


class LedgerService:
    """
    Owner of the simulator's single account and its transaction ledger.

    Balance, holdings and history form one consistency unit. Every read and
    every write runs under one re-entrant lock, and every write is one
    storage transaction, so readers never see a half-applied trade.
    apply_trade() is the only way trades change state; reset() the only
    other mutation.

    The trading engine holds locked() across its read-validate-apply
    sequence so a check against holdings or balance cannot go stale before
    the write lands.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        initial_balance: Decimal,
        account_id: int = DEFAULT_ACCOUNT_ID,
    ):
        self._uow_factory = uow_factory
        self._initial_balance = initial_balance
        self._account_id = account_id
        self._lock = threading.RLock()

    @property
    def initial_balance(self) -> Decimal:
        return self._initial_balance

    @property
    def account_id(self) -> int:
        return self._account_id

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the ledger lock; ledger calls inside the block re-enter it."""
        with self._lock:
            yield

    def ensure_account(self) -> Account:
        """Create the account with the initial balance if it does not exist yet."""
        with self._lock, self._uow_factory() as uow:
            account = uow.accounts.get_by_id(self._account_id)
            if account is not None:
                return account
            account = uow.accounts.create(
                Account(account_id=self._account_id, balance=self._initial_balance)
            )
            uow.commit()
            logger.info("Created account %s with balance $%s", self._account_id, self._initial_balance)
            return account

    def get_account(self) -> Account:
        """Get the account with balance and holdings."""
        with self._lock, self._uow_factory() as uow:
            return self._load_account(uow)

    def get_balance(self) -> Decimal:
        return self.get_account().balance

    def get_holdings(self) -> dict[str, Decimal]:
        """Return a copy of symbol -> held quantity."""
        return dict(self.get_account().holdings)

    def get_history(self) -> list[Transaction]:
        """Return every transaction in the order it was committed."""
        with self._lock, self._uow_factory() as uow:
            self._load_account(uow)
            return uow.transactions.list_by_account(self._account_id)

    def apply_trade(self, transaction: Transaction) -> Transaction:
        """
        Settle a trade and append it to the history.

        Balance moves by the transaction's net cash impact and its symbol's
        holding by its quantity delta; all of it lands in one commit or none
        does. A holding whose quantity drops to zero or below is removed.
        Amount, price and total must be positive and exact at STORAGE_SCALE.
        Returns the committed transaction with its txn_id.
        """
        if transaction.amount <= 0 or transaction.unit_price <= 0 or transaction.total_value <= 0:
            raise ValueError(
                f"Transaction requires positive amount, unit_price and total_value: {transaction}"
            )
        for value in (transaction.amount, transaction.unit_price, transaction.total_value):
            if not fits_scale(value):
                raise ValueError(
                    f"Transaction value {value} exceeds {STORAGE_SCALE} decimal places"
                )

        with self._lock, self._uow_factory() as uow:
            account = self._load_account(uow)

            new_balance = account.balance + transaction.net_cash_impact
            if new_balance < 0:
                raise ValueError(
                    f"Trade would overdraw account: balance {account.balance}, "
                    f"delta {transaction.net_cash_impact}"
                )

            holdings = dict(account.holdings)
            new_quantity = account.quantity_of(transaction.symbol) + transaction.quantity_delta
            if new_quantity <= 0:
                holdings.pop(transaction.symbol, None)
            else:
                holdings[transaction.symbol] = new_quantity

            uow.accounts.update(
                Account(account_id=account.account_id, balance=new_balance, holdings=holdings)
            )
            committed = uow.transactions.create(self._account_id, transaction)
            uow.commit()
            return committed

    def reset(self) -> Account:
        """
        Restore the initial balance and clear holdings and history.

        Creates the account if it is missing. Idempotent.
        """
        with self._lock, self._uow_factory() as uow:
            fresh = Account(account_id=self._account_id, balance=self._initial_balance)
            if uow.accounts.get_by_id(self._account_id) is None:
                account = uow.accounts.create(fresh)
            else:
                removed = uow.transactions.delete_by_account(self._account_id)
                logger.debug("Reset removed %d transaction(s)", removed)
                account = uow.accounts.update(fresh)
            uow.commit()
            logger.info("Account has been reset to the initial balance of $%s", self._initial_balance)
            return account

    def _load_account(self, uow: UnitOfWork) -> Account:
        account: Optional[Account] = uow.accounts.get_by_id(self._account_id)
        if account is None:
            raise AccountNotFoundError(self._account_id)
        return account
