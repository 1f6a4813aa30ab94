"""
Unit tests for FeedNormalizer.

Tests cover:
- Ticker messages in Kraken v2 shape (str, bytes, dict)
- Heartbeats, status and subscription acks are dropped
- Malformed payloads and bad prices are dropped without raising
- Forwarding to the broadcast sink
- Subscription request shape
"""

import json
import logging
from decimal import Decimal

import pytest

from tradesim.domain.views import PriceUpdate
from tradesim.services import FeedNormalizer, PriceCache


def ticker(symbol, last, **extra) -> str:
    """Build a ticker update message."""
    entry = {"symbol": symbol, "last": last, "bid": 1, "ask": 2}
    entry.update(extra)
    return json.dumps({"channel": "ticker", "type": "update", "data": [entry]})


class RecordingSink:
    """Sink that records published updates."""

    def __init__(self):
        self.updates: list[PriceUpdate] = []

    def publish(self, update: PriceUpdate) -> None:
        self.updates.append(update)


class FailingSink:
    def publish(self, update: PriceUpdate) -> None:
        raise RuntimeError("viewer gone")


# =============================================================================
# RECOGNIZED MESSAGES
# =============================================================================


class TestTickerMessages:
    """Tests for messages that carry a price."""

    def test_ticker_updates_cache(self, normalizer: FeedNormalizer, price_cache: PriceCache):
        """
        GIVEN a ticker message for BTC/USD at 50000.1
        WHEN it is handled
        THEN the cache holds BTC/USD = 50000.1
        """
        update = normalizer.handle_message(ticker("BTC/USD", 50000.1))

        assert update == PriceUpdate(symbol="BTC/USD", price=Decimal("50000.1"))
        assert price_cache.get("BTC/USD") == Decimal("50000.1")

    def test_bytes_and_dict_messages_accepted(
        self, normalizer: FeedNormalizer, price_cache: PriceCache
    ):
        normalizer.handle_message(ticker("ETH/USD", 3000).encode("utf-8"))
        normalizer.handle_message({"data": [{"symbol": "SOL/USD", "last": 150}]})

        assert price_cache.get("ETH/USD") == Decimal("3000")
        assert price_cache.get("SOL/USD") == Decimal("150")

    def test_numeric_string_price_accepted(self, normalizer: FeedNormalizer):
        update = normalizer.normalize(ticker("ADA/USD", "0.45"))

        assert update.price == Decimal("0.45")

    def test_only_first_data_entry_used(
        self, normalizer: FeedNormalizer, price_cache: PriceCache
    ):
        """
        GIVEN a message whose data array holds two entries
        WHEN it is handled
        THEN only the first entry reaches the cache
        """
        message = {
            "channel": "ticker",
            "data": [
                {"symbol": "BTC/USD", "last": 50000},
                {"symbol": "ETH/USD", "last": 3000},
            ],
        }

        normalizer.handle_message(message)

        assert price_cache.snapshot() == {"BTC/USD": Decimal("50000")}

    def test_update_forwarded_to_sink(self, price_cache: PriceCache):
        sink = RecordingSink()
        normalizer = FeedNormalizer(price_cache, sink)

        normalizer.handle_message(ticker("BTC/USD", 50000))

        assert sink.updates == [PriceUpdate(symbol="BTC/USD", price=Decimal("50000"))]

    def test_sink_failure_does_not_undo_cache_update(self, price_cache: PriceCache):
        """
        GIVEN a sink that raises on publish
        WHEN a valid ticker is handled
        THEN the cache is still updated and no exception escapes
        """
        normalizer = FeedNormalizer(price_cache, FailingSink())

        update = normalizer.handle_message(ticker("BTC/USD", 50000))

        assert update is not None
        assert price_cache.get("BTC/USD") == Decimal("50000")


# =============================================================================
# DROPPED MESSAGES
# =============================================================================


class TestDroppedMessages:
    """Tests for messages that must leave the cache untouched."""

    @pytest.mark.parametrize(
        "message",
        [
            json.dumps({"channel": "heartbeat"}),
            json.dumps({"channel": "status", "data": [{"system": "online"}]}),
            json.dumps({"method": "subscribe", "success": True, "result": {"symbol": "BTC/USD"}}),
            json.dumps({"channel": "ticker", "data": []}),
            json.dumps({"channel": "ticker", "data": "BTC/USD"}),
            json.dumps({"channel": "ticker", "data": ["BTC/USD"]}),
            json.dumps([1, 2, 3]),
            "not json at all",
            b"\xff\xfe",
            "",
        ],
        ids=[
            "heartbeat",
            "status-without-symbol",
            "subscribe-ack",
            "empty-data",
            "data-not-list",
            "data-entry-not-object",
            "top-level-array",
            "invalid-json",
            "invalid-bytes",
            "empty-string",
        ],
    )
    def test_unrecognized_message_dropped(
        self, normalizer: FeedNormalizer, price_cache: PriceCache, message
    ):
        assert normalizer.handle_message(message) is None
        assert len(price_cache) == 0
        assert normalizer.dropped_count == 1

    @pytest.mark.parametrize(
        "last",
        [None, 0, -5, "abc", True, float("nan"), "Infinity", [50000], {"v": 1}],
        ids=["missing", "zero", "negative", "non-numeric", "bool", "nan", "inf", "list", "object"],
    )
    def test_invalid_price_dropped(
        self, normalizer: FeedNormalizer, price_cache: PriceCache, last
    ):
        """
        GIVEN a ticker message whose last price is not a positive finite number
        WHEN it is handled
        THEN it is dropped and the cache is unchanged
        """
        price_cache.update("BTC/USD", Decimal("50000"))
        message = {"channel": "ticker", "data": [{"symbol": "BTC/USD", "last": last}]}

        assert normalizer.handle_message(message) is None
        assert price_cache.get("BTC/USD") == Decimal("50000")

    @pytest.mark.parametrize("symbol", [None, "", 42])
    def test_missing_symbol_dropped(
        self, normalizer: FeedNormalizer, price_cache: PriceCache, symbol
    ):
        message = {"channel": "ticker", "data": [{"symbol": symbol, "last": 1}]}

        assert normalizer.handle_message(message) is None
        assert len(price_cache) == 0


# =============================================================================
# SUBSCRIPTION TESTS
# =============================================================================


class TestSubscriptionMessage:
    """Tests for the ticker subscription request."""

    def test_subscription_shape(self):
        message = FeedNormalizer.subscription_message(["BTC/USD", "ETH/USD"])

        assert message == {
            "method": "subscribe",
            "params": {"channel": "ticker", "symbol": ["BTC/USD", "ETH/USD"]},
        }


# =============================================================================
# LOGGING TESTS
# =============================================================================


class TestLogging:
    """Per-tick log records defer formatting to the logging framework."""

    def test_price_update_logged_with_deferred_args(
        self, normalizer: FeedNormalizer, caplog
    ):
        """
        GIVEN debug logging for the normalizer
        WHEN a ticker is handled
        THEN the record carries symbol and price as arguments, not a pre-built string
        """
        with caplog.at_level(logging.DEBUG, logger="tradesim.services.feed_normalizer"):
            normalizer.handle_message(ticker("BTC/USD", 50000.1))

        record = next(r for r in caplog.records if r.msg.startswith("Updated price"))
        assert record.args == ("BTC/USD", Decimal("50000.1"))
        assert record.getMessage() == "Updated price for BTC/USD: 50000.1"

    def test_no_update_record_when_debug_disabled(
        self, normalizer: FeedNormalizer, caplog
    ):
        with caplog.at_level(logging.INFO, logger="tradesim.services.feed_normalizer"):
            normalizer.handle_message(ticker("BTC/USD", 50000.1))

        assert not [r for r in caplog.records if r.msg.startswith("Updated price")]
