"""Core utilities and shared functionality."""

from tradesim.core.timezone import now_utc, to_utc, UTC
from tradesim.core.precision import STORAGE_SCALE, QUANTUM, fits_scale, to_scale
from tradesim.core.exceptions import (
    AppError,
    AccountNotFoundError,
    ConfigurationError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "UTC",
    "STORAGE_SCALE",
    "QUANTUM",
    "fits_scale",
    "to_scale",
    "AppError",
    "AccountNotFoundError",
    "ConfigurationError",
]
