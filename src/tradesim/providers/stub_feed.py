"""Stub price feed for offline/testing use."""

import asyncio
import json
import logging
import random
from decimal import Decimal

from tradesim.services.feed_normalizer import FeedNormalizer

logger = logging.getLogger(__name__)


# Starting prices for common pairs
_STUB_PRICES: dict[str, Decimal] = {
    "BTC/USD": Decimal("50000.00"),
    "ETH/USD": Decimal("3000.00"),
    "SOL/USD": Decimal("150.00"),
    "ADA/USD": Decimal("0.45"),
    "XRP/USD": Decimal("0.55"),
    "DOGE/USD": Decimal("0.12"),
    "LTC/USD": Decimal("80.00"),
    "DOT/USD": Decimal("7.00"),
    "ALGO/USD": Decimal("0.18"),
    "AVAX/USD": Decimal("35.00"),
}


class StubTickerFeed:
    """
    Stub feed emitting Kraken-shaped ticker messages from a random walk.

    Uses predefined starting prices for common pairs; unknown symbols start
    at a seeded random price. Messages go through the same normalizer as
    the live feed.
    """

    def __init__(
        self,
        symbols: list[str],
        normalizer: FeedNormalizer,
        interval_seconds: float = 1.0,
        seed: int = 42,
        max_step_pct: float = 0.005,
    ):
        self._rng = random.Random(seed)
        self._normalizer = normalizer
        self._interval = interval_seconds
        self._max_step = max_step_pct
        self._prices: dict[str, Decimal] = {
            symbol: _STUB_PRICES.get(symbol) or self._random_start()
            for symbol in symbols
        }
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def next_messages(self) -> list[str]:
        """Advance every price one step and return one ticker message per symbol."""
        messages = []
        for symbol, price in self._prices.items():
            change = Decimal(str(self._rng.uniform(-self._max_step, self._max_step)))
            new_price = (price * (1 + change)).quantize(Decimal("0.00000001"))
            if new_price <= 0:
                new_price = price
            self._prices[symbol] = new_price
            messages.append(
                json.dumps({
                    "channel": "ticker",
                    "type": "update",
                    "data": [{"symbol": symbol, "last": float(new_price)}],
                })
            )
        return messages

    async def run(self) -> None:
        """Emit a round of ticks every interval until cancelled."""
        self._connected = True
        logger.info("Stub price feed started for %d symbol(s)", len(self._prices))
        try:
            while True:
                for message in self.next_messages():
                    self._normalizer.handle_message(message)
                await asyncio.sleep(self._interval)
        finally:
            self._connected = False

    def _random_start(self) -> Decimal:
        return Decimal(str(1 + self._rng.random() * 99)).quantize(Decimal("0.01"))
