"""Pydantic schemas for portfolio valuation."""

from typing import Optional

from pydantic import BaseModel


class PositionResponse(BaseModel):
    """A single holding; price fields are null when no price is cached."""

    symbol: str
    quantity: float
    last_price: Optional[float] = None
    market_value: Optional[float] = None


class PortfolioResponse(BaseModel):
    """Cash, valued holdings and total."""

    cash_balance: float
    positions: list[PositionResponse]
    total_value: float
