"""Duration assessment facade: one report per issue."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jira_assess.core.clock import Clock, utc_now
from jira_assess.core.config import AssessmentSettings
from jira_assess.core.errors import InvalidInputError
from jira_assess.core.models import DurationAssessment, StatusTimeline

from .timeline.anomalies import calculate_point_to_duration_ratio, identify_duration_anomalies
from .timeline.blocked import assess_blocked_time
from .timeline.cycling import detect_issue_status_cycling
from .timeline.durations import (
    analyze_sprint_boundaries,
    calculate_in_progress_duration,
    calculate_status_timings,
)

logger = logging.getLogger(__name__)


def get_duration_assessment(
    issue: Mapping[str, Any] | None,
    comments_response: Mapping[str, Any] | None,
    *,
    settings: AssessmentSettings | None = None,
    clock: Clock | None = None,
) -> DurationAssessment:
    """Assess the lifecycle timing of a single issue.

    Parameters
    ----------
    issue : Mapping
        Raw Jira issue JSON including ``changelog.histories``.
    comments_response : Mapping
        Comment listing shaped like ``{"comments": [...]}``.
    settings : AssessmentSettings, optional
        Thresholds and field ids; defaults are used when omitted.
    clock : Clock, optional
        Source of "now" for periods that are still open. Read once per call.

    Returns
    -------
    DurationAssessment

    Raises
    ------
    InvalidInputError
        If ``issue`` or ``comments_response`` is None.
    """
    if issue is None:
        raise InvalidInputError("An issue is required for a duration assessment")
    if comments_response is None:
        raise InvalidInputError("A comments response is required for a duration assessment")
    settings = settings or AssessmentSettings()
    now = (clock or utc_now)()

    in_progress = calculate_in_progress_duration(issue, settings.timezone)
    sprints = analyze_sprint_boundaries(issue, settings.sprint_field_id)
    ratio = calculate_point_to_duration_ratio(
        issue, in_progress.in_progress_days, settings.story_points_field_id
    )
    timings = calculate_status_timings(issue, now)
    cycling = detect_issue_status_cycling(issue)
    blocked = assess_blocked_time(issue, comments_response, now, settings)
    anomalies = identify_duration_anomalies(
        issue,
        in_progress.in_progress_days,
        sprints.sprint_reassignments,
        ratio,
        cycling.total_revisits,
        settings,
    )
    logger.debug(
        "Assessed %s: %s in-progress days, %s revisits, %s blocked days, %s anomalies",
        issue.get("key", "<issue>") if isinstance(issue, Mapping) else "<issue>",
        in_progress.in_progress_days,
        cycling.total_revisits,
        blocked.total_days,
        len(anomalies),
    )

    return DurationAssessment(
        in_progress_days=in_progress.in_progress_days,
        exceeds_sprint=sprints.exceeds_sprint,
        sprint_reassignments=sprints.sprint_reassignments,
        point_to_duration_ratio=ratio,
        status_transitions=StatusTimeline(
            first_in_progress=in_progress.first_in_progress,
            last_done=in_progress.last_done,
            average_time_in_status=timings,
        ),
        status_cycling=cycling,
        blocked_time=blocked,
        anomalies=anomalies,
    )
