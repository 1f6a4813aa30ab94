"""Application context: builds and owns the long-lived services.

One context is created per process. The ledger, price cache and trading
engine it holds are handed to request handlers through FastAPI
dependencies; nothing looks them up globally.
"""

import asyncio
import contextlib
import logging
from typing import Callable, Optional

from tradesim.config.settings import Settings, get_settings
from tradesim.core.exceptions import ConfigurationError
from tradesim.repositories.protocols import UnitOfWork
from tradesim.repositories.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    get_session_factory,
    init_db_with_url,
)
from tradesim.providers import (
    PriceFeed,
    KrakenTickerFeed,
    StubTickerFeed,
    build_reconnect_policy,
)
from tradesim.services import (
    PriceCache,
    PriceBroadcaster,
    FeedNormalizer,
    LedgerService,
    TradingEngine,
    AnalysisService,
)

logger = logging.getLogger(__name__)


def _default_uow() -> UnitOfWork:
    return SqlAlchemyUnitOfWork(get_session_factory())


class AppContext:
    """
    Application context wiring settings, storage, feed and services.

    Lifecycle: initialize() once (schema + account), start_feed() /
    stop_feed() around the serving period.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        uow_factory: Optional[Callable[[], UnitOfWork]] = None,
    ):
        """
        Args:
            settings: Settings to use. Defaults to the global settings.
            uow_factory: Storage unit-of-work factory. Defaults to SQLAlchemy
                sessions on the configured database.
        """
        self.settings = settings or get_settings()
        self._uses_default_storage = uow_factory is None

        self.price_cache = PriceCache()
        self.broadcaster = PriceBroadcaster(queue_size=self.settings.broadcast_queue_size)
        self.normalizer = FeedNormalizer(self.price_cache, self.broadcaster)
        self.ledger = LedgerService(
            uow_factory=uow_factory or _default_uow,
            initial_balance=self.settings.initial_balance,
        )
        self.trading = TradingEngine(
            ledger=self.ledger,
            price_cache=self.price_cache,
            quote_currency=self.settings.quote_currency,
        )
        self.analysis = AnalysisService(ledger=self.ledger, trading_engine=self.trading)
        self.feed: Optional[PriceFeed] = self._build_feed()

        self._feed_task: Optional[asyncio.Task] = None

    def initialize(self) -> None:
        """Create the schema (default storage only) and the account if missing."""
        if self._uses_default_storage:
            init_db_with_url(self.settings.get_database_url())
        self.ledger.ensure_account()

    @property
    def feed_connected(self) -> bool:
        return self.feed is not None and self.feed.connected

    def start_feed(self) -> None:
        """Start the feed as a background task on the running loop."""
        if self.feed is None:
            logger.info("Price feed disabled")
            return
        if self._feed_task is not None and not self._feed_task.done():
            return
        self._feed_task = asyncio.create_task(self.feed.run(), name="price-feed")
        self._feed_task.add_done_callback(self._on_feed_done)

    async def stop_feed(self) -> None:
        """Cancel the feed task and wait for it to finish."""
        task, self._feed_task = self._feed_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _build_feed(self) -> Optional[PriceFeed]:
        source = self.settings.feed_source.lower()
        if source == "none":
            return None
        if source == "stub":
            return StubTickerFeed(
                symbols=self.settings.feed_symbols,
                normalizer=self.normalizer,
                interval_seconds=self.settings.stub_feed_interval_seconds,
            )
        if source == "kraken":
            return KrakenTickerFeed(
                url=self.settings.feed_url,
                symbols=self.settings.feed_symbols,
                normalizer=self.normalizer,
                reconnect_policy=build_reconnect_policy(self.settings),
            )
        raise ConfigurationError(f"Unknown feed_source: {self.settings.feed_source}")

    @staticmethod
    def _on_feed_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Price feed task failed", exc_info=exc)
