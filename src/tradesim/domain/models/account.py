"""Account domain model."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class Account:
    """
    The simulator's single cash account.

    Holdings map symbol -> quantity. A symbol is present only while its
    quantity is positive; selling down to zero removes it.
    """

    account_id: int
    balance: Decimal
    holdings: dict[str, Decimal] = field(default_factory=dict)

    def quantity_of(self, symbol: str) -> Decimal:
        """Return held quantity for symbol (zero when absent)."""
        return self.holdings.get(symbol, Decimal("0"))
