"""View models for portfolio and analysis outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass
class PositionView:
    """View model for a single holding, valued when a price is known."""

    symbol: str
    quantity: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None


@dataclass
class PortfolioView:
    """Cash plus holdings valued at current prices."""

    cash_balance: Decimal
    positions: list[PositionView] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
