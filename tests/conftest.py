"""
Pytest configuration and fixtures for trading simulator tests.

This module provides:
- In-memory SQLite database fixtures
- Unit-of-work factory bound to the test database
- Service fixtures (ledger, price cache, trading engine, analysis)
- Price seeding helpers
- FastAPI test client wired to the test database with the feed disabled
"""

from decimal import Decimal
from typing import Callable

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from tradesim.app_context import AppContext
from tradesim.main import create_app
from tradesim.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from tradesim.repositories.sqlalchemy import orm_models  # noqa: F401
from tradesim.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUnitOfWork,
)
from tradesim.services import (
    PriceCache,
    PriceBroadcaster,
    FeedNormalizer,
    LedgerService,
    TradingEngine,
    AnalysisService,
)
from tradesim.config.settings import Settings, reset_settings


INITIAL_BALANCE = Decimal("10000")

DEFAULT_PRICES: dict[str, Decimal] = {
    "BTC/USD": Decimal("50000"),
    "ETH/USD": Decimal("3000"),
    "SOL/USD": Decimal("150"),
}


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=test_engine,
    )


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow_factory(session_factory) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Unit-of-work factory on the test database."""
    return lambda: SqlAlchemyUnitOfWork(session_factory)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def price_cache() -> PriceCache:
    """Provide an empty price cache."""
    return PriceCache()


@pytest.fixture
def broadcaster() -> PriceBroadcaster:
    """Provide a price broadcaster with a small queue per subscriber."""
    return PriceBroadcaster(queue_size=5)


@pytest.fixture
def normalizer(price_cache: PriceCache, broadcaster: PriceBroadcaster) -> FeedNormalizer:
    """Provide a feed normalizer writing into the test price cache."""
    return FeedNormalizer(price_cache, broadcaster)


@pytest.fixture
def ledger_service(uow_factory) -> LedgerService:
    """Provide LedgerService with the account already created."""
    ledger = LedgerService(uow_factory=uow_factory, initial_balance=INITIAL_BALANCE)
    ledger.ensure_account()
    return ledger


@pytest.fixture
def trading_engine(ledger_service: LedgerService, price_cache: PriceCache) -> TradingEngine:
    """Provide TradingEngine on the test ledger and price cache."""
    return TradingEngine(ledger=ledger_service, price_cache=price_cache)


@pytest.fixture
def analysis_service(
    ledger_service: LedgerService,
    trading_engine: TradingEngine,
) -> AnalysisService:
    """Provide AnalysisService on the test ledger."""
    return AnalysisService(ledger=ledger_service, trading_engine=trading_engine)


# =============================================================================
# PRICE HELPERS
# =============================================================================


def seed_prices(cache: PriceCache, prices: dict[str, Decimal] = None) -> None:
    """Write prices into a cache (defaults to DEFAULT_PRICES)."""
    for symbol, price in (prices or DEFAULT_PRICES).items():
        cache.update(symbol, price)


@pytest.fixture
def seeded_prices(price_cache: PriceCache) -> PriceCache:
    """Price cache holding DEFAULT_PRICES."""
    seed_prices(price_cache)
    return price_cache


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests: feed disabled, default balance."""
    return Settings(
        database_url="sqlite://",
        feed_source="none",
        initial_balance=INITIAL_BALANCE,
    )


@pytest.fixture
def app_context(test_settings: Settings, uow_factory) -> AppContext:
    """Application context on the test database."""
    return AppContext(settings=test_settings, uow_factory=uow_factory)


@pytest.fixture
def client(app_context: AppContext) -> TestClient:
    """Provide FastAPI test client with test database and no upstream feed."""
    app = create_app(app_context)
    with TestClient(app) as c:
        yield c
