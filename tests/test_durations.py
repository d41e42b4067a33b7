from builders import history, make_issue, sprint_item, status_change, transition

from jira_assess.analytics.timeline.durations import (
    analyze_sprint_boundaries,
    calculate_in_progress_duration,
    calculate_status_timings,
    extract_sprint_changes,
    hours_per_status,
)
from jira_assess.analytics.timeline.periods import build_status_periods

SPRINT_FIELD = "customfield_10600"


def test_hours_per_status_empty(now):
    assert hours_per_status([], now) == {}


def test_hours_per_status_aggregates_same_status(now):
    periods = build_status_periods(
        [
            transition("To Do", "2023-01-01T10:00:00.000Z"),
            transition("In Progress", "2023-01-05T14:00:00.000Z"),
            transition("To Do", "2023-01-10T09:00:00.000Z"),
            transition("Done", "2023-01-15T16:00:00.000Z"),
        ]
    )
    # now is 2023-01-20T12:00Z, so the open Done period is 116 hours
    assert hours_per_status(periods, now) == {"To Do": 227.0, "In Progress": 115.0, "Done": 116.0}


def test_hours_per_status_keeps_labels_of_same_category_apart(now):
    periods = build_status_periods(
        [
            transition("In Progress", "2023-01-19T10:00:00.000Z"),
            transition("Code Review", "2023-01-19T12:00:00.000Z"),
        ]
    )
    assert hours_per_status(periods, now) == {"In Progress": 2.0, "Code Review": 24.0}


def test_calculate_status_timings(now):
    assert calculate_status_timings(make_issue(), now) == {}
    issue = make_issue([status_change("2023-01-19T12:00:00.000Z", "To Do", "In Progress")])
    assert calculate_status_timings(issue, now) == {"In Progress": 24.0}


def test_in_progress_duration_scenario():
    # 2022-01-05 is a Wednesday; one weekend falls inside the range
    issue = make_issue(
        [
            status_change("2022-01-15T10:00:00.000+0000", "Review", "Done"),
            status_change("2022-01-01T10:00:00.000+0000", None, "To Do"),
            status_change("2022-01-10T10:00:00.000+0000", "In Progress", "Review"),
            status_change("2022-01-05T10:00:00.000+0000", "To Do", "In Progress"),
        ]
    )
    result = calculate_in_progress_duration(issue)
    assert result.first_in_progress == "2022-01-05T10:00:00.000+0000"
    assert result.last_done == "2022-01-15T10:00:00.000+0000"
    assert result.in_progress_days == 8


def test_in_progress_duration_uses_last_done_after_reopen():
    issue = make_issue(
        [
            status_change("2023-01-09T10:00:00.000+0000", "To Do", "In Progress"),
            status_change("2023-01-10T10:00:00.000+0000", "In Progress", "Done"),
            status_change("2023-01-11T10:00:00.000+0000", "Done", "In Progress"),
            status_change("2023-01-13T10:00:00.000+0000", "In Progress", "Done"),
        ]
    )
    result = calculate_in_progress_duration(issue)
    assert result.first_in_progress == "2023-01-09T10:00:00.000+0000"
    assert result.last_done == "2023-01-13T10:00:00.000+0000"
    assert result.in_progress_days == 5


def test_in_progress_duration_missing_endpoints():
    never_started = make_issue([status_change("2023-01-10T10:00:00.000+0000", "To Do", "Done")])
    result = calculate_in_progress_duration(never_started)
    assert result.first_in_progress is None
    assert result.last_done == "2023-01-10T10:00:00.000+0000"
    assert result.in_progress_days is None

    result = calculate_in_progress_duration(make_issue())
    assert (result.in_progress_days, result.first_in_progress, result.last_done) == (None, None, None)


def test_extract_sprint_changes_splits_names():
    issue = make_issue(
        [
            history("2023-01-01T10:00:00.000+0000", sprint_item(None, "Sprint 1")),
            history("2023-01-15T10:00:00.000+0000", sprint_item("Sprint 1", "Sprint 1, Sprint 2")),
        ]
    )
    changes = extract_sprint_changes(issue)
    assert len(changes) == 2
    assert changes[0].from_sprints is None
    assert changes[0].to_sprints == ("Sprint 1",)
    assert changes[1].to_sprints == ("Sprint 1", "Sprint 2")
    assert changes[1].timestamp == "2023-01-15T10:00:00.000+0000"


def test_sprint_boundaries_without_changelog():
    result = analyze_sprint_boundaries({}, SPRINT_FIELD)
    assert (result.exceeds_sprint, result.sprint_reassignments) == (False, 0)
    result = analyze_sprint_boundaries(make_issue([]), SPRINT_FIELD)
    assert (result.exceeds_sprint, result.sprint_reassignments) == (False, 0)


def test_sprint_boundaries_ignore_status_changes():
    issue = make_issue([status_change("2023-01-01T10:00:00.000+0000", "To Do", "In Progress")])
    result = analyze_sprint_boundaries(issue, SPRINT_FIELD)
    assert (result.exceeds_sprint, result.sprint_reassignments) == (False, 0)


def test_sprint_boundaries_count_changes():
    issue = make_issue(
        [
            history("2023-01-01T10:00:00.000+0000", sprint_item("Sprint 1", "Sprint 2")),
            history("2023-01-15T10:00:00.000+0000", sprint_item("Sprint 2", "Sprint 3")),
        ]
    )
    result = analyze_sprint_boundaries(issue, SPRINT_FIELD)
    assert (result.exceeds_sprint, result.sprint_reassignments) == (True, 2)


def test_sprint_boundaries_from_current_membership():
    multi = make_issue([], customfield_10600=[{"name": "Sprint 1"}, {"name": "Sprint 2"}])
    result = analyze_sprint_boundaries(multi, SPRINT_FIELD)
    assert (result.exceeds_sprint, result.sprint_reassignments) == (True, 0)

    single = make_issue([], customfield_10600=[{"name": "Sprint 1"}])
    assert analyze_sprint_boundaries(single, SPRINT_FIELD).exceeds_sprint is False
    assert analyze_sprint_boundaries(multi, "customfield_99999").exceeds_sprint is False
