"""Reconnect policies for the upstream feed connection."""

from typing import Optional, Protocol

from tradesim.config.settings import Settings
from tradesim.core.exceptions import ConfigurationError


class ReconnectPolicy(Protocol):
    """Decides whether, and after how long, a dropped feed reconnects."""

    def next_delay(self, attempt: int) -> Optional[float]:
        """
        Seconds to wait before reconnect attempt number ``attempt`` (1-based),
        or None to stop.
        """
        ...


class NoReconnect:
    """Never reconnect; a dropped connection ends the feed."""

    def next_delay(self, attempt: int) -> Optional[float]:
        return None


class ExponentialBackoff:
    """
    Reconnect forever (or up to max_attempts) with capped exponential delay.

    Delay for attempt n is ``initial * factor ** (n - 1)``, capped at maximum.
    """

    def __init__(
        self,
        initial: float = 1.0,
        maximum: float = 60.0,
        factor: float = 2.0,
        max_attempts: Optional[int] = None,
    ):
        if initial <= 0 or maximum < initial or factor < 1:
            raise ConfigurationError(
                f"Invalid backoff: initial={initial}, maximum={maximum}, factor={factor}"
            )
        self.initial = initial
        self.maximum = maximum
        self.factor = factor
        self.max_attempts = max_attempts

    def next_delay(self, attempt: int) -> Optional[float]:
        if self.max_attempts is not None and attempt > self.max_attempts:
            return None
        return min(self.initial * self.factor ** (attempt - 1), self.maximum)


def build_reconnect_policy(settings: Settings) -> ReconnectPolicy:
    """Create the reconnect policy named by settings.feed_reconnect."""
    name = settings.feed_reconnect.lower()
    if name == "none":
        return NoReconnect()
    if name == "backoff":
        return ExponentialBackoff(
            initial=settings.feed_reconnect_initial_delay,
            maximum=settings.feed_reconnect_max_delay,
            factor=settings.feed_reconnect_factor,
        )
    raise ConfigurationError(f"Unknown feed_reconnect policy: {settings.feed_reconnect}")
