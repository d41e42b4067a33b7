"""Timestamp parsing and business-day/hour arithmetic (pure functions)."""

from __future__ import annotations

from datetime import timedelta

import numpy as np
import pandas as pd
import pytz

from jira_assess.core.config import TIMEZONE


def normalize_timestamp(value, target_tz=pytz.UTC) -> pd.Timestamp | None:
    """Normalize a timestamp-like value into ``target_tz``.

    Naive values are interpreted as UTC. Returns None when the input cannot be
    parsed.
    """
    if value is None or not pd.api.types.is_scalar(value) or value == "":
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    try:
        if ts.tzinfo is None:
            ts = ts.tz_localize(pytz.UTC)
        return ts.tz_convert(target_tz)
    except (TypeError, ValueError):
        return None


def _valid_range(start, end, tz) -> tuple[pd.Timestamp, pd.Timestamp] | None:
    start_ts = normalize_timestamp(start, tz)
    end_ts = normalize_timestamp(end, tz)
    if start_ts is None or end_ts is None or start_ts > end_ts:
        return None
    return start_ts, end_ts


def business_days(start, end, tz: str = TIMEZONE) -> int:
    """Count weekdays between two timestamps, both endpoints inclusive.

    Each value is reduced to its calendar date in ``tz`` before counting, so
    a same-day range yields 1 on a weekday and 0 on a weekend.

    Parameters
    ----------
    start, end : str | datetime | pd.Timestamp | None
        Range bounds.
    tz : str
        Timezone name used for day boundaries.

    Returns
    -------
    int
        Number of Monday-Friday days, or 0 for invalid or inverted ranges.

    Examples
    --------
    >>> business_days("2023-01-09", "2023-01-16")
    6
    >>> business_days("2023-01-10", "2023-01-05")
    0
    """
    bounds = _valid_range(start, end, pytz.timezone(tz))
    if bounds is None:
        return 0
    start_day = bounds[0].date()
    end_day = bounds[1].date()
    return int(np.busday_count(start_day, end_day + timedelta(days=1)))


def hours_between(start, end) -> float:
    """Hours from ``start`` to ``end`` rounded to one decimal.

    Returns 0 for invalid or inverted ranges.
    """
    bounds = _valid_range(start, end, pytz.UTC)
    if bounds is None:
        return 0
    hours = (bounds[1] - bounds[0]).total_seconds() / 3600.0
    return round(hours, 1)
