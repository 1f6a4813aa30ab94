"""Service layer - business logic orchestration."""

from tradesim.services.price_cache import PriceCache
from tradesim.services.price_broadcaster import PriceBroadcaster, PriceSink
from tradesim.services.feed_normalizer import FeedNormalizer
from tradesim.services.ledger_service import LedgerService
from tradesim.services.trading_engine import TradingEngine, resolve_price_key
from tradesim.services.analysis_service import AnalysisService

__all__ = [
    "PriceCache",
    "PriceBroadcaster",
    "PriceSink",
    "FeedNormalizer",
    "LedgerService",
    "TradingEngine",
    "resolve_price_key",
    "AnalysisService",
]
