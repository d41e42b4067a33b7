"""Flatten duration assessments into DataFrames for reporting."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from jira_assess.core.models import DurationAssessment

ASSESSMENT_COLUMNS: tuple[str, ...] = (
    "key",
    "in_progress_days",
    "first_in_progress",
    "last_done",
    "exceeds_sprint",
    "sprint_reassignments",
    "point_to_duration_ratio",
    "total_revisits",
    "blocked_days",
    "blocked_reasons",
    "anomaly_count",
    "anomalies",
)


def assessment_to_record(key: str, assessment: DurationAssessment) -> dict[str, object]:
    return {
        "key": key,
        "in_progress_days": assessment.in_progress_days,
        "first_in_progress": assessment.status_transitions.first_in_progress,
        "last_done": assessment.status_transitions.last_done,
        "exceeds_sprint": assessment.exceeds_sprint,
        "sprint_reassignments": assessment.sprint_reassignments,
        "point_to_duration_ratio": assessment.point_to_duration_ratio,
        "total_revisits": assessment.status_cycling.total_revisits,
        "blocked_days": assessment.blocked_time.total_days,
        "blocked_reasons": list(assessment.blocked_time.reasons),
        "anomaly_count": len(assessment.anomalies),
        "anomalies": list(assessment.anomalies),
    }


def build_assessment_frame(assessments: Mapping[str, DurationAssessment]) -> pd.DataFrame:
    """One row per issue, in mapping order.

    Returns an empty DataFrame with the expected columns when no assessments
    are given.
    """
    records = [assessment_to_record(key, a) for key, a in assessments.items()]
    if not records:
        return pd.DataFrame(columns=list(ASSESSMENT_COLUMNS))
    return pd.DataFrame(records, columns=list(ASSESSMENT_COLUMNS))


def build_status_hours_frame(assessments: Mapping[str, DurationAssessment]) -> pd.DataFrame:
    """Long-form frame of hours per status: columns key, status, hours."""
    records: list[dict[str, object]] = []
    for key, assessment in assessments.items():
        for status, hours in assessment.status_transitions.average_time_in_status.items():
            records.append({"key": key, "status": status, "hours": float(hours)})
    if not records:
        return pd.DataFrame(columns=["key", "status", "hours"])
    return pd.DataFrame(records)
