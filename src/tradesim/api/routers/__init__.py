"""API routers package."""

from tradesim.api.routers.trading import router as trading_router
from tradesim.api.routers.account import router as account_router
from tradesim.api.routers.stream import router as stream_router

__all__ = [
    "trading_router",
    "account_router",
    "stream_router",
]
