"""Price feed protocol."""

from typing import Protocol


class PriceFeed(Protocol):
    """
    Protocol for upstream price feeds.

    Implementations run as one long-lived task and push every raw message
    through a FeedNormalizer. run() returns when the feed gives up; it is
    stopped by cancelling the task.
    """

    @property
    def connected(self) -> bool:
        """True while messages are flowing."""
        ...

    async def run(self) -> None:
        """Consume the feed until it ends or the task is cancelled."""
        ...
