"""Pydantic schemas for trading endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from tradesim.domain.models.enums import TradeSide, TradeErrorKind


class TradeRequest(BaseModel):
    """Request schema for a buy or sell."""

    symbol: str = Field(..., min_length=1, max_length=32, description="Symbol, e.g. BTC or BTC/USD")
    # Positivity is checked by the trading engine so it reports INVALID_AMOUNT
    amount: Decimal = Field(..., description="Quantity to trade")


class ApiResponse(BaseModel):
    """Envelope for commands (buy, sell, reset)."""

    success: bool
    message: str
    error: Optional[TradeErrorKind] = None


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    txn_id: Optional[int] = None
    symbol: str
    amount: float
    unit_price: float
    total_value: float
    side: TradeSide
    timestamp: datetime
