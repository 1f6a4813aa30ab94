"""Timezone utilities. Crypto markets never close, so everything is UTC."""

from datetime import datetime

import pytz

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # SQLite drops tzinfo; stored values are UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)
