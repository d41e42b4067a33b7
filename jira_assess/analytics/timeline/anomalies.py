"""Velocity ratio and duration anomaly checks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jira_assess.core.config import AssessmentSettings
from jira_assess.core.mappers import issue_type_name, story_points


def calculate_point_to_duration_ratio(
    issue: Mapping[str, Any] | None,
    in_progress_days: int | None,
    field_id: str,
) -> float | None:
    """Story points delivered per in-progress business day (2 decimals)."""
    points = story_points(issue, field_id)
    if points is None or not in_progress_days:
        return None
    return round(points / in_progress_days, 2)


def check_long_duration(in_progress_days: int | None, threshold: int) -> str | None:
    if in_progress_days is None or in_progress_days <= threshold:
        return None
    return f"Long in-progress duration ({in_progress_days} business days)"


def check_sprint_boundaries(sprint_reassignments: int, threshold: int) -> str | None:
    if sprint_reassignments <= threshold:
        return None
    return f"Issue reassigned across sprints {sprint_reassignments} times"


def check_velocity_issues(ratio: float | None, low: float, high: float) -> list[str]:
    if ratio is None:
        return []
    if ratio < low:
        return [f"Low velocity ({ratio} points per day)"]
    if ratio > high:
        return [f"Unusually high velocity ({ratio} points per day)"]
    return []


def check_status_cycling(total_revisits: int, threshold: int) -> str | None:
    if total_revisits <= threshold:
        return None
    return f"Excessive status cycling ({total_revisits} status revisits)"


def check_bug_duration(in_progress_days: int | None, threshold: int) -> str | None:
    if in_progress_days is None or in_progress_days <= threshold:
        return None
    return f"Bug fix taking longer than expected ({in_progress_days} days)"


def check_task_duration(in_progress_days: int | None, threshold: int) -> str | None:
    if in_progress_days is None or in_progress_days <= threshold:
        return None
    return f"Task taking longer than expected ({in_progress_days} days)"


def check_issue_type_timeline(
    issue_type: str | None,
    in_progress_days: int | None,
    settings: AssessmentSettings,
) -> list[str]:
    kind = (issue_type or "").lower()
    if kind == "bug":
        message = check_bug_duration(in_progress_days, settings.bug_duration_days)
    elif kind == "task":
        message = check_task_duration(in_progress_days, settings.task_duration_days)
    else:
        return []
    return [message] if message else []


def identify_duration_anomalies(
    issue: Mapping[str, Any] | None,
    in_progress_days: int | None,
    sprint_reassignments: int,
    point_to_duration_ratio: float | None,
    total_revisits: int,
    settings: AssessmentSettings | None = None,
) -> list[str]:
    """Collect anomaly messages for one issue.

    Order: long duration, sprint reassignments, velocity, status cycling,
    issue-type specific timelines.
    """
    settings = settings or AssessmentSettings()
    anomalies: list[str] = []

    long_duration = check_long_duration(in_progress_days, settings.long_duration_days)
    if long_duration:
        anomalies.append(long_duration)

    sprint = check_sprint_boundaries(sprint_reassignments, settings.sprint_reassignment_threshold)
    if sprint:
        anomalies.append(sprint)

    anomalies.extend(
        check_velocity_issues(point_to_duration_ratio, settings.low_velocity_ratio, settings.high_velocity_ratio)
    )

    cycling = check_status_cycling(total_revisits, settings.status_cycling_threshold)
    if cycling:
        anomalies.append(cycling)

    anomalies.extend(check_issue_type_timeline(issue_type_name(issue), in_progress_days, settings))
    return anomalies
