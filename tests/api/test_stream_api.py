"""
API tests for the live price websocket and service endpoints.

Tests cover:
- WS /ws/prices snapshot on connect
- WS /ws/prices forwarding of live feed ticks
- GET /health and GET /
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from tradesim.app_context import AppContext
from tradesim.config.settings import Settings
from tradesim.main import create_app


# =============================================================================
# PRICE STREAM TESTS
# =============================================================================


class TestPriceStream:
    """Tests for WS /ws/prices."""

    def test_snapshot_sent_on_connect(self, client: TestClient, app_context: AppContext):
        """
        GIVEN BTC/USD and ETH/USD are cached
        WHEN a viewer connects to /ws/prices
        THEN it first receives one message per cached symbol
        """
        app_context.price_cache.update("BTC/USD", Decimal("50000"))
        app_context.price_cache.update("ETH/USD", Decimal("3000.5"))

        with client.websocket_connect("/ws/prices") as websocket:
            received = [websocket.receive_json(), websocket.receive_json()]

        assert received == [
            {"symbol": "BTC/USD", "price": 50000.0},
            {"symbol": "ETH/USD", "price": 3000.5},
        ]

    def test_live_ticks_forwarded(self, uow_factory):
        """
        GIVEN the stub feed ticking BTC/USD every 10ms
        WHEN a viewer stays connected
        THEN it keeps receiving BTC/USD prices
        """
        settings = Settings(
            database_url="sqlite://",
            feed_source="stub",
            feed_symbols=["BTC/USD"],
            stub_feed_interval_seconds=0.01,
        )
        app = create_app(AppContext(settings=settings, uow_factory=uow_factory))

        with TestClient(app) as client:
            with client.websocket_connect("/ws/prices") as websocket:
                messages = [websocket.receive_json() for _ in range(3)]

        assert all(m["symbol"] == "BTC/USD" for m in messages)
        assert all(m["price"] > 0 for m in messages)


# =============================================================================
# SERVICE ENDPOINT TESTS
# =============================================================================


class TestServiceEndpoints:
    """Tests for GET /health and GET /."""

    def test_health_reports_feed_status(self, client: TestClient, app_context: AppContext):
        app_context.price_cache.update("BTC/USD", Decimal("50000"))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "feed_connected": False,
            "prices_cached": 1,
        }

    def test_root_lists_docs(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
        assert "app" in response.json()
