"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Pairs requested from the upstream ticker channel on connect
DEFAULT_FEED_SYMBOLS: list[str] = [
    "BTC/USD", "ETH/USD", "BNB/USD", "XRP/USD", "ADA/USD",
    "DOGE/USD", "SOL/USD", "DOT/USD", "MATIC/USD", "LTC/USD",
    "SHIB/USD", "AVAX/USD", "UNI/USD", "XLM/USD", "BCH/USD",
    "ALGO/USD", "VET/USD", "ICP/USD", "MANA/USD", "AXS/USD",
]


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".tradesim"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRADESIM_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Crypto Trading Simulator"
    app_version: str = "0.1.0"

    # Data directory (the SQLite database lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Account
    initial_balance: Decimal = Decimal("10000")
    quote_currency: str = "USD"

    # Upstream price feed
    feed_source: str = "kraken"  # kraken | stub | none
    feed_url: str = "wss://ws.kraken.com/v2"
    feed_symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_FEED_SYMBOLS))
    feed_reconnect: str = "none"  # none | backoff
    feed_reconnect_initial_delay: float = 1.0
    feed_reconnect_max_delay: float = 60.0
    feed_reconnect_factor: float = 2.0
    stub_feed_interval_seconds: float = 1.0

    # Downstream price stream
    broadcast_queue_size: int = 100

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "tradesim.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
