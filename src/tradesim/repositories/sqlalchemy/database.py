"""Database connection and session management."""

from typing import Optional

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.orm import sessionmaker, declarative_base

from tradesim.config.settings import get_settings

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False)

    kwargs = {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # Every session must see the same in-memory database
        kwargs["poolclass"] = StaticPool
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite-specific
        echo=False,
        **kwargs,
    )


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = _build_engine(settings.get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=get_engine(),
        )
    return _SessionLocal


def init_db() -> None:
    """Initialize database tables."""
    from tradesim.repositories.sqlalchemy import orm_models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)


def init_db_with_url(database_url: str) -> None:
    """Initialize database at a specific URL, replacing the current engine."""
    global _engine, _SessionLocal

    reset_database()
    _engine = _build_engine(database_url)
    _SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=_engine,
    )

    # Import ORM models and create tables
    from tradesim.repositories.sqlalchemy import orm_models  # noqa: F401
    Base.metadata.create_all(bind=_engine)


def reset_database() -> None:
    """Reset database state (for reconfiguration)."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None
