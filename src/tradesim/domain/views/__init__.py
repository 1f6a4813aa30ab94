"""View models for service outputs."""

from tradesim.domain.views.trading import (
    PriceUpdate,
    PriceQuote,
    TradeResult,
)
from tradesim.domain.views.portfolio import PositionView, PortfolioView

__all__ = [
    "PriceUpdate",
    "PriceQuote",
    "TradeResult",
    "PositionView",
    "PortfolioView",
]
