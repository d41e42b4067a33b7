"""Wall-clock sources used for open-ended periods."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment`` (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)

    def _now() -> datetime:
        return moment

    return _now
