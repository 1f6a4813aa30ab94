"""
Unit tests for AppContext wiring and Settings.
"""

from decimal import Decimal

import pytest

from tradesim.app_context import AppContext
from tradesim.config.settings import Settings, DEFAULT_FEED_SYMBOLS
from tradesim.core.exceptions import ConfigurationError
from tradesim.providers import KrakenTickerFeed, StubTickerFeed


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, tmp_path):
        settings = Settings(data_dir=tmp_path)

        assert settings.initial_balance == Decimal("10000")
        assert settings.feed_source == "kraken"
        assert settings.feed_reconnect == "none"
        assert settings.feed_symbols == DEFAULT_FEED_SYMBOLS
        assert settings.get_database_url() == f"sqlite:///{tmp_path / 'tradesim.db'}"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TRADESIM_INITIAL_BALANCE", "2500.50")
        monkeypatch.setenv("TRADESIM_FEED_SOURCE", "stub")
        monkeypatch.setenv("TRADESIM_FEED_SYMBOLS", '["BTC/USD"]')

        settings = Settings()

        assert settings.initial_balance == Decimal("2500.50")
        assert settings.feed_source == "stub"
        assert settings.feed_symbols == ["BTC/USD"]

    def test_explicit_database_url_wins(self):
        assert Settings(database_url="sqlite://").get_database_url() == "sqlite://"


class TestAppContext:
    """Tests for service wiring."""

    @pytest.mark.parametrize(
        "source,expected",
        [("kraken", KrakenTickerFeed), ("stub", StubTickerFeed), ("STUB", StubTickerFeed)],
    )
    def test_feed_built_from_source(self, uow_factory, source, expected):
        context = AppContext(settings=Settings(feed_source=source), uow_factory=uow_factory)

        assert isinstance(context.feed, expected)
        assert context.feed_connected is False

    def test_feed_disabled(self, uow_factory):
        context = AppContext(settings=Settings(feed_source="none"), uow_factory=uow_factory)

        assert context.feed is None
        assert context.feed_connected is False

    def test_unknown_feed_source_rejected(self, uow_factory):
        with pytest.raises(ConfigurationError):
            AppContext(settings=Settings(feed_source="bloomberg"), uow_factory=uow_factory)

    def test_initialize_creates_account(self, uow_factory):
        """
        GIVEN an empty database and initial balance 750
        WHEN the context initializes
        THEN the account exists with balance 750
        """
        settings = Settings(feed_source="none", initial_balance=Decimal("750"))
        context = AppContext(settings=settings, uow_factory=uow_factory)

        context.initialize()

        assert context.ledger.get_balance() == Decimal("750")

    def test_feed_updates_reach_trading_engine(self, uow_factory):
        context = AppContext(settings=Settings(feed_source="none"), uow_factory=uow_factory)
        context.initialize()

        context.normalizer.handle_message({"data": [{"symbol": "BTC/USD", "last": 40000}]})
        result = context.trading.buy("BTC", Decimal("0.1"))

        assert result.success is True
        assert context.ledger.get_balance() == Decimal("6000")
