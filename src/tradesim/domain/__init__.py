"""Domain layer - pure business models with no external dependencies."""

from tradesim.domain.models import (
    Account,
    Transaction,
    TradeSide,
    TradeErrorKind,
)

__all__ = [
    "Account",
    "Transaction",
    "TradeSide",
    "TradeErrorKind",
]
