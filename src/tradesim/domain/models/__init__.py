"""Domain models package."""

from tradesim.domain.models.enums import TradeSide, TradeErrorKind
from tradesim.domain.models.account import Account
from tradesim.domain.models.transaction import Transaction

__all__ = [
    "TradeSide",
    "TradeErrorKind",
    "Account",
    "Transaction",
]
