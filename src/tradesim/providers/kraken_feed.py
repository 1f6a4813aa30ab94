"""Kraken v2 websocket ticker feed."""

import asyncio
import json
import logging
from typing import Any, AsyncContextManager, Callable, Optional

import websockets
from websockets.exceptions import WebSocketException

from tradesim.providers.reconnect import NoReconnect, ReconnectPolicy
from tradesim.services.feed_normalizer import FeedNormalizer

logger = logging.getLogger(__name__)

Connector = Callable[[str], AsyncContextManager[Any]]


class KrakenTickerFeed:
    """
    Streams ticker updates from Kraken into the price cache.

    On every (re)connect the ticker subscription for the configured symbols
    is sent first. Each inbound message goes through the normalizer, which
    drops anything it does not recognize. When the connection drops or
    cannot be opened, the reconnect policy decides whether to try again.
    """

    def __init__(
        self,
        url: str,
        symbols: list[str],
        normalizer: FeedNormalizer,
        reconnect_policy: Optional[ReconnectPolicy] = None,
        connect: Connector = websockets.connect,
    ):
        self._url = url
        self._symbols = list(symbols)
        self._normalizer = normalizer
        self._policy = reconnect_policy or NoReconnect()
        self._connect = connect
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    async def run(self) -> None:
        """Consume the feed until the reconnect policy gives up."""
        attempt = 0
        while True:
            try:
                await self._consume()
                logger.warning("Kraken WebSocket closed: %s", self._url)
            except (OSError, WebSocketException) as e:
                logger.error("Kraken WebSocket error: %s", e)
            finally:
                was_connected = self._connected
                self._connected = False

            # A connection that got through restarts the backoff sequence
            attempt = 1 if was_connected else attempt + 1
            delay = self._policy.next_delay(attempt)
            if delay is None:
                logger.warning("Price feed stopped; not reconnecting")
                return
            logger.info("Reconnecting to Kraken WebSocket in %.1fs (attempt %d)", delay, attempt)
            await asyncio.sleep(delay)

    async def _consume(self) -> None:
        async with self._connect(self._url) as ws:
            self._connected = True
            logger.info("Connected to Kraken WebSocket: %s", self._url)

            subscription = json.dumps(FeedNormalizer.subscription_message(self._symbols))
            await ws.send(subscription)
            logger.info("Subscribed to Kraken ticker channel: %s", subscription)

            async for message in ws:
                self._normalizer.handle_message(message)
