"""Normalization of upstream ticker messages into price updates."""

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from tradesim.domain.views import PriceUpdate
from tradesim.services.price_cache import PriceCache
from tradesim.services.price_broadcaster import PriceSink

logger = logging.getLogger(__name__)

RawMessage = Union[str, bytes, bytearray, dict]


class FeedNormalizer:
    """
    Turns raw ticker messages into (symbol, price) updates.

    Recognized shape: ``{"data": [{"symbol": "BTC/USD", "last": 50000.1, ...}]}``.
    Everything else (heartbeats, status and subscription acks, malformed
    payloads) is dropped with a log line. Never raises on bad input so one
    bad message cannot stop the feed.
    """

    def __init__(
        self,
        price_cache: PriceCache,
        sink: Optional[PriceSink] = None,
    ):
        self._cache = price_cache
        self._sink = sink
        self._dropped = 0

    @staticmethod
    def subscription_message(symbols: list[str]) -> dict[str, Any]:
        """Build the ticker subscription request sent when the connection opens."""
        return {
            "method": "subscribe",
            "params": {
                "channel": "ticker",
                "symbol": list(symbols),
            },
        }

    def handle_message(self, message: RawMessage) -> Optional[PriceUpdate]:
        """
        Normalize one message and apply it.

        On success the price cache is updated and the update is forwarded to
        the sink. Returns the update, or None if the message was dropped.
        """
        update = self.normalize(message)
        if update is None:
            self._dropped += 1
            return None

        self._cache.update(update.symbol, update.price)
        logger.debug("Updated price for %s: %s", update.symbol, update.price)

        if self._sink is not None:
            try:
                self._sink.publish(update)
            except Exception:
                # Display feed only; the cache update stands
                logger.exception("Failed to broadcast price for %s", update.symbol)
        return update

    def normalize(self, message: RawMessage) -> Optional[PriceUpdate]:
        """Extract a PriceUpdate from a raw message without side effects."""
        payload = self._decode(message)
        if payload is None:
            return None

        data = payload.get("data")
        if not isinstance(data, list) or not data:
            # Heartbeats, status and subscription acks carry no data array
            logger.debug(
                "Ignoring feed message without data: %s",
                payload.get("channel", payload.get("method")),
            )
            return None

        first = data[0]
        if not isinstance(first, dict):
            logger.warning("Dropping feed message with non-object data entry: %r", first)
            return None

        symbol = first.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            logger.warning("Dropping feed message without symbol: %r", first)
            return None

        price = self._parse_price(first.get("last"))
        if price is None:
            logger.warning("Dropping feed message with invalid price for %s: %r", symbol, first.get("last"))
            return None

        return PriceUpdate(symbol=symbol, price=price)

    @property
    def dropped_count(self) -> int:
        """Messages that did not produce a price update."""
        return self._dropped

    @staticmethod
    def _decode(message: RawMessage) -> Optional[dict]:
        if isinstance(message, dict):
            return message
        try:
            payload = json.loads(message)
        except (TypeError, ValueError):
            logger.warning("Dropping undecodable feed message: %.200r", message)
            return None
        if not isinstance(payload, dict):
            logger.debug("Ignoring non-object feed message: %.200r", payload)
            return None
        return payload

    @staticmethod
    def _parse_price(value: Any) -> Optional[Decimal]:
        """Return a positive finite Decimal, or None."""
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return None
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            return None
        if not price.is_finite() or price <= 0:
            return None
        return price
