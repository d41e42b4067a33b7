"""Blocked period detection, reason correlation, and blocked-time totals.

A blocked period opens when the issue enters a status matching the blocking
vocabulary and closes when it moves to a non-blocking status. Comments posted
close to the start of a period are used to explain it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timedelta
from functools import reduce
from typing import Any, NamedTuple

import pytz

from jira_assess.core.config import (
    BLOCKING_KEYWORDS,
    COMMENT_WINDOW_HOURS,
    COMPLEX_COMMENT_REASON,
    TIMEZONE,
    AssessmentSettings,
)
from jira_assess.core.mappers import extract_comments
from jira_assess.core.models import BlockedPeriod, BlockedTime, StatusTransition
from jira_assess.core.status import is_blocked_status

from .dates import business_days, normalize_timestamp
from .transitions import extract_status_transitions


class BlockedState(NamedTuple):
    current: BlockedPeriod | None
    closed: tuple[BlockedPeriod, ...]


EMPTY_BLOCKED_STATE = BlockedState(current=None, closed=())


def process_blocked_transition(
    state: BlockedState,
    transition: StatusTransition,
    keywords: Iterable[str] = BLOCKING_KEYWORDS,
) -> BlockedState:
    """Advance the blocked-period state machine by one transition."""
    if transition.to_status is None:
        return state
    blocked = is_blocked_status(transition.to_status, keywords)
    if blocked and state.current is None:
        return BlockedState(BlockedPeriod(start_time=transition.timestamp), state.closed)
    if not blocked and state.current is not None:
        finished = replace(state.current, end_time=transition.timestamp)
        return BlockedState(None, state.closed + (finished,))
    return state


def find_blocked_periods(
    transitions: Sequence[StatusTransition],
    keywords: Iterable[str] = BLOCKING_KEYWORDS,
) -> list[BlockedPeriod]:
    """Blocked intervals in a chronological transition sequence.

    Consecutive blocking statuses extend a single period. A period still open
    at the end of the history is returned with ``end_time=None``.
    """
    keywords = tuple(keywords)
    final = reduce(
        lambda state, transition: process_blocked_transition(state, transition, keywords),
        transitions,
        EMPTY_BLOCKED_STATE,
    )
    periods = list(final.closed)
    if final.current is not None:
        periods.append(final.current)
    return periods


def is_relevant_comment(
    comment: Mapping[str, Any],
    start_time,
    window_hours: float = COMMENT_WINDOW_HOURS,
) -> bool:
    """True when the comment was created within ``window_hours`` of ``start_time``."""
    created = normalize_timestamp(comment.get("created"), pytz.UTC)
    start = normalize_timestamp(start_time, pytz.UTC)
    if created is None or start is None:
        return False
    return abs(created - start) <= timedelta(hours=window_hours)


def extract_comment_blocking_reason(
    period: BlockedPeriod,
    comments_response: Mapping[str, Any] | None,
    window_hours: float = COMMENT_WINDOW_HOURS,
) -> BlockedPeriod:
    """Attach a reason from the first comment near the period start.

    Candidates are taken in input order, not by proximity. Plain string bodies
    are used verbatim; structured (rich document) bodies get a generic reason.
    When no comment qualifies, or the qualifying comment has no body, the
    period is returned unchanged.
    """
    comment = next(
        (c for c in extract_comments(comments_response) if is_relevant_comment(c, period.start_time, window_hours)),
        None,
    )
    if comment is None:
        return period
    body = comment.get("body")
    if isinstance(body, str):
        return replace(period, reason=body)
    if body is not None:
        return replace(period, reason=COMPLEX_COMMENT_REASON)
    return period


def extract_blocking_reasons(
    periods: list[BlockedPeriod],
    comments_response: Mapping[str, Any] | None,
    window_hours: float = COMMENT_WINDOW_HOURS,
) -> list[BlockedPeriod]:
    if not periods or not extract_comments(comments_response):
        return periods
    return [extract_comment_blocking_reason(p, comments_response, window_hours) for p in periods]


def identify_blocked_periods(
    issue: Mapping[str, Any] | None,
    comments_response: Mapping[str, Any] | None,
    settings: AssessmentSettings | None = None,
) -> list[BlockedPeriod]:
    settings = settings or AssessmentSettings()
    periods = find_blocked_periods(extract_status_transitions(issue), settings.blocking_keywords)
    return extract_blocking_reasons(periods, comments_response, settings.comment_window_hours)


def calculate_total_blocked_days(periods: Sequence[BlockedPeriod], now: datetime, tz: str = TIMEZONE) -> int:
    """Sum of business days across periods; open periods run until ``now``."""
    total = 0
    for period in periods:
        end = period.end_time if period.end_time is not None else now
        total += business_days(period.start_time, end, tz)
    return total


def extract_unique_reasons(periods: Sequence[BlockedPeriod]) -> list[str]:
    # Deduplicate preserve order
    seen: set[str] = set()
    reasons: list[str] = []
    for period in periods:
        if period.reason is None or period.reason in seen:
            continue
        seen.add(period.reason)
        reasons.append(period.reason)
    return reasons


def assess_blocked_time(
    issue: Mapping[str, Any] | None,
    comments_response: Mapping[str, Any] | None,
    now: datetime,
    settings: AssessmentSettings | None = None,
) -> BlockedTime:
    settings = settings or AssessmentSettings()
    periods = identify_blocked_periods(issue, comments_response, settings)
    return BlockedTime(
        total_days=calculate_total_blocked_days(periods, now, settings.timezone),
        reasons=extract_unique_reasons(periods),
    )
