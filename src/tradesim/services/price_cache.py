"""Latest-price cache fed by the ticker stream."""

import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.core.timezone import now_utc
from tradesim.domain.views import PriceQuote


class PriceCache:
    """
    Thread-safe map of symbol -> latest quoted price.

    Written by the feed task, read by trade requests on worker threads.
    Each critical section covers one dict operation or a shallow copy, so
    an update for one symbol never waits on work for another. Snapshots are
    consistent per entry only.
    """

    def __init__(self) -> None:
        self._quotes: dict[str, PriceQuote] = {}
        self._lock = threading.Lock()

    def update(
        self,
        symbol: str,
        price: Decimal,
        as_of: Optional[datetime] = None,
    ) -> PriceQuote:
        """Overwrite the last price for symbol."""
        if price <= 0:
            raise ValueError(f"Price must be positive: {symbol}={price}")
        quote = PriceQuote(symbol=symbol, price=price, as_of=as_of or now_utc())
        with self._lock:
            self._quotes[symbol] = quote
        return quote

    def get(self, symbol: str) -> Optional[Decimal]:
        """Return the cached price, or None if the symbol is unknown."""
        quote = self.get_quote(symbol)
        return quote.price if quote else None

    def get_quote(self, symbol: str) -> Optional[PriceQuote]:
        with self._lock:
            return self._quotes.get(symbol)

    def snapshot(self) -> dict[str, Decimal]:
        """Return symbol -> price for every cached symbol."""
        with self._lock:
            quotes = list(self._quotes.values())
        return {q.symbol: q.price for q in quotes}

    def clear(self) -> None:
        with self._lock:
            self._quotes.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._quotes)

    def __contains__(self, symbol: object) -> bool:
        with self._lock:
            return symbol in self._quotes
