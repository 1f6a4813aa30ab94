"""Price feed providers module."""

from tradesim.providers.price_feed import PriceFeed
from tradesim.providers.reconnect import (
    ReconnectPolicy,
    NoReconnect,
    ExponentialBackoff,
    build_reconnect_policy,
)
from tradesim.providers.kraken_feed import KrakenTickerFeed
from tradesim.providers.stub_feed import StubTickerFeed

__all__ = [
    "PriceFeed",
    "ReconnectPolicy",
    "NoReconnect",
    "ExponentialBackoff",
    "build_reconnect_policy",
    "KrakenTickerFeed",
    "StubTickerFeed",
]
