"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import TradeSide


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry for one executed trade (source of truth for reporting).

    - amount is the traded quantity, unit_price the price at execution
    - total_value = amount * unit_price
    - symbol is stored as the user supplied it, not the resolved price key
    - txn_id is assigned by storage on commit
    """

    symbol: str
    amount: Decimal
    unit_price: Decimal
    total_value: Decimal
    side: TradeSide
    timestamp: datetime
    txn_id: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", TradeSide(self.side))

    @property
    def net_cash_impact(self) -> Decimal:
        """
        Cash effect of this trade on the account balance.

        Positive = cash added (SELL), Negative = cash removed (BUY).
        """
        if self.side == TradeSide.BUY:
            return -self.total_value
        return self.total_value

    @property
    def quantity_delta(self) -> Decimal:
        """Signed change to the symbol's held quantity."""
        if self.side == TradeSide.BUY:
            return self.amount
        return -self.amount
