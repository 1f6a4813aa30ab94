"""Pydantic schemas for API request/response."""

from tradesim.api.schemas.trading import (
    TradeRequest,
    ApiResponse,
    TransactionResponse,
)
from tradesim.api.schemas.portfolio import (
    PositionResponse,
    PortfolioResponse,
)

__all__ = [
    "TradeRequest",
    "ApiResponse",
    "TransactionResponse",
    "PositionResponse",
    "PortfolioResponse",
]
