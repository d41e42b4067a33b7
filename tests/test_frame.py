from jira_assess.analytics.aggregations.frame import (
    ASSESSMENT_COLUMNS,
    build_assessment_frame,
    build_status_hours_frame,
)
from jira_assess.core.models import (
    BlockedTime,
    DurationAssessment,
    StatusCycling,
    StatusTimeline,
)


def _assessment(days, hours, anomalies=()):
    return DurationAssessment(
        in_progress_days=days,
        exceeds_sprint=False,
        sprint_reassignments=0,
        point_to_duration_ratio=None,
        status_transitions=StatusTimeline(first_in_progress=None, last_done=None, average_time_in_status=hours),
        status_cycling=StatusCycling(),
        blocked_time=BlockedTime(total_days=1, reasons=["Waiting"]),
        anomalies=list(anomalies),
    )


def test_empty_frames_have_columns():
    df = build_assessment_frame({})
    assert df.empty
    assert list(df.columns) == list(ASSESSMENT_COLUMNS)
    hours = build_status_hours_frame({})
    assert hours.empty
    assert list(hours.columns) == ["key", "status", "hours"]


def test_assessment_frame_rows():
    df = build_assessment_frame(
        {
            "OBS-1": _assessment(3, {"To Do": 1.5}, ["Long in-progress duration (3 business days)"]),
            "OBS-2": _assessment(7, {}),
        }
    )
    assert list(df.columns) == list(ASSESSMENT_COLUMNS)
    assert list(df["key"]) == ["OBS-1", "OBS-2"]
    assert list(df["in_progress_days"]) == [3, 7]
    assert list(df["anomaly_count"]) == [1, 0]
    assert df.loc[0, "blocked_reasons"] == ["Waiting"]


def test_status_hours_frame_is_long_form():
    df = build_status_hours_frame(
        {
            "OBS-1": _assessment(3, {"To Do": 1.5, "Done": 2.0}),
            "OBS-2": _assessment(7, {"To Do": 4.0}),
        }
    )
    assert df.to_dict("records") == [
        {"key": "OBS-1", "status": "To Do", "hours": 1.5},
        {"key": "OBS-1", "status": "Done", "hours": 2.0},
        {"key": "OBS-2", "status": "To Do", "hours": 4.0},
    ]
    assert df.groupby("status")["hours"].sum().to_dict() == {"Done": 2.0, "To Do": 5.5}
