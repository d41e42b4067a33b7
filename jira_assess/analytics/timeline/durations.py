"""Time-in-status, cycle time and sprint boundary metrics."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from jira_assess.core.config import SPRINT_FIELD, TIMEZONE
from jira_assess.core.mappers import map_change_records, sprint_memberships
from jira_assess.core.models import (
    InProgressDuration,
    SprintBoundaries,
    SprintChange,
    StatusCategory,
    StatusPeriod,
    StatusTransition,
)

from .dates import business_days, hours_between
from .periods import build_status_periods
from .transitions import extract_status_transitions, is_field


def hours_per_status(periods: Sequence[StatusPeriod], now: datetime) -> dict[str, float]:
    """Total hours spent in each status across all of its periods.

    Parameters
    ----------
    periods : Sequence[StatusPeriod]
        Status periods as produced by :func:`build_status_periods`.
    now : datetime
        End used for the still-open period.

    Returns
    -------
    dict[str, float]
        Mapping of status name to hours (one decimal). Distinct labels are
        never merged, even when they share a category.
    """
    totals: defaultdict[str, float] = defaultdict(float)
    for period in periods:
        end = period.end_time if period.end_time is not None else now
        totals[period.status] += hours_between(period.start_time, end)
    return {status: round(hours, 1) for status, hours in totals.items()}


def calculate_status_timings(issue: Mapping[str, Any] | None, now: datetime) -> dict[str, float]:
    transitions = extract_status_transitions(issue)
    if not transitions:
        return {}
    return hours_per_status(build_status_periods(transitions), now)


def find_first_in_progress(transitions: Sequence[StatusTransition]) -> StatusTransition | None:
    return next((t for t in transitions if t.to_category is StatusCategory.IN_PROGRESS), None)


def find_last_done(transitions: Sequence[StatusTransition]) -> StatusTransition | None:
    return next((t for t in reversed(transitions) if t.to_category is StatusCategory.DONE), None)


def calculate_in_progress_duration(
    issue: Mapping[str, Any] | None, tz: str = TIMEZONE
) -> InProgressDuration:
    """Business days from first entering in-progress to last entering done.

    ``in_progress_days`` is None when the issue never entered an in-progress
    status or never reached done.
    """
    transitions = extract_status_transitions(issue)
    first = find_first_in_progress(transitions)
    last = find_last_done(transitions)
    first_in_progress = first.timestamp if first else None
    last_done = last.timestamp if last else None

    in_progress_days = None
    if first_in_progress and last_done:
        in_progress_days = business_days(first_in_progress, last_done, tz)
    return InProgressDuration(
        in_progress_days=in_progress_days,
        first_in_progress=first_in_progress,
        last_done=last_done,
    )


def _split_sprints(value: str | None) -> tuple[str, ...] | None:
    if not value:
        return None
    return tuple(name.strip() for name in value.split(",") if name.strip())


def extract_sprint_changes(issue: Mapping[str, Any] | None) -> list[SprintChange]:
    """Sprint field edits from the changelog, in history order."""
    changes: list[SprintChange] = []
    for record in map_change_records(issue):
        for item in record.items:
            if not is_field(item, SPRINT_FIELD):
                continue
            changes.append(
                SprintChange(
                    from_sprints=_split_sprints(item.from_string),
                    to_sprints=_split_sprints(item.to_string),
                    timestamp=record.created,
                )
            )
    return changes


def analyze_sprint_boundaries(issue: Mapping[str, Any] | None, sprint_field_id: str) -> SprintBoundaries:
    """Count sprint reassignments and flag issues spanning several sprints.

    An issue exceeds its sprint when its changelog has any sprint edit, or,
    lacking edits, when its current sprint field lists more than one sprint.
    """
    reassignments = len(extract_sprint_changes(issue))
    if reassignments > 0:
        exceeds = True
    else:
        exceeds = len(sprint_memberships(issue, sprint_field_id)) > 1
    return SprintBoundaries(exceeds_sprint=exceeds, sprint_reassignments=reassignments)
