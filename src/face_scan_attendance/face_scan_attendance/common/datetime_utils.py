from __future__ import annotations

from datetime import datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Half-open interval [local midnight, next local midnight) containing `moment`."""
    start = datetime.combine(moment.date(), time.min)
    return start, start + timedelta(days=1)
