"""Fan-out of normalized price ticks to passive viewers."""

import asyncio
import logging
from typing import Protocol

from tradesim.domain.views import PriceUpdate

logger = logging.getLogger(__name__)


class PriceSink(Protocol):
    """Anything that accepts normalized price updates."""

    def publish(self, update: PriceUpdate) -> None:
        ...


class PriceBroadcaster:
    """
    Lossy, fire-and-forget broadcast of price updates.

    Every subscriber gets its own bounded queue. A subscriber that falls
    behind loses updates instead of slowing down the feed. Must be used from
    the event loop thread.
    """

    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue] = set()
        self._dropped = 0

    def subscribe(self) -> asyncio.Queue:
        """Register a new viewer and return its queue of price messages."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        logger.debug("Price stream subscriber added (%d total)", len(self._subscribers))
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)
        logger.debug("Price stream subscriber removed (%d total)", len(self._subscribers))

    def publish(self, update: PriceUpdate) -> None:
        message = {"symbol": update.symbol, "price": float(update.price)}
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                self._dropped += 1

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def dropped_count(self) -> int:
        """Updates discarded because a subscriber queue was full."""
        return self._dropped
