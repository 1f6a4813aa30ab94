"""View models for prices and trade outcomes."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models import Transaction, TradeErrorKind


@dataclass(frozen=True)
class PriceUpdate:
    """A normalized (symbol, price) tick taken from the upstream feed."""

    symbol: str
    price: Decimal


@dataclass(frozen=True)
class PriceQuote:
    """Latest cached price for a symbol."""

    symbol: str
    price: Decimal
    as_of: datetime


@dataclass(frozen=True)
class TradeResult:
    """
    Outcome of a buy or sell request.

    Either carries the committed transaction and a confirmation message,
    or a TradeErrorKind and a human-readable reason. Rejected trades never
    change account state.
    """

    success: bool
    message: str
    transaction: Optional[Transaction] = None
    error: Optional[TradeErrorKind] = None

    @classmethod
    def executed(cls, transaction: Transaction, message: str) -> "TradeResult":
        return cls(success=True, message=message, transaction=transaction)

    @classmethod
    def rejected(cls, error: TradeErrorKind, message: str) -> "TradeResult":
        return cls(success=False, message=message, error=error)
