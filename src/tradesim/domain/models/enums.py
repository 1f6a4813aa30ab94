"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a simulated trade."""

    BUY = "BUY"
    SELL = "SELL"


class TradeErrorKind(str, Enum):
    """Reasons a trade request is rejected without touching the ledger."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    SYMBOL_UNAVAILABLE = "SYMBOL_UNAVAILABLE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_HOLDINGS = "INSUFFICIENT_HOLDINGS"
