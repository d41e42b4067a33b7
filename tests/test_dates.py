from datetime import UTC, datetime

from jira_assess.analytics.timeline.dates import business_days, hours_between, normalize_timestamp


def test_normalize_timestamp():
    ts = normalize_timestamp("2023-01-10T12:00:00.000+0000")
    assert ts is not None and ts.year == 2023 and ts.hour == 12
    naive = normalize_timestamp("2023-01-10T12:00:00")
    assert naive is not None and str(naive.tz) == "UTC"
    assert normalize_timestamp("invalid-date") is None
    assert normalize_timestamp(None) is None
    assert normalize_timestamp("") is None
    assert normalize_timestamp({"content": []}) is None


def test_business_days_invalid_dates():
    assert business_days("invalid-date", "2023-01-10") == 0
    assert business_days("2023-01-10", "invalid-date") == 0
    assert business_days(None, "2023-01-10") == 0


def test_business_days_inverted_range():
    assert business_days("2023-01-10", "2023-01-05") == 0


def test_business_days_same_day():
    # 2023-01-09 was a Monday, 2023-01-07 a Saturday
    assert business_days("2023-01-09", "2023-01-09") == 1
    assert business_days("2023-01-07", "2023-01-07") == 0


def test_business_days_excludes_weekends():
    assert business_days("2023-01-09", "2023-01-13") == 5
    assert business_days("2023-01-09", "2023-01-16") == 6
    assert business_days("2023-01-06", "2023-01-11") == 4


def test_business_days_month_and_year_boundaries():
    assert business_days("2023-01-30", "2023-02-03") == 5
    assert business_days("2022-12-29", "2023-01-04") == 5


def test_business_days_truncates_to_start_of_day():
    assert business_days("2023-01-09T23:00:00.000Z", "2023-01-10T01:00:00.000Z") == 2


def test_business_days_respects_timezone():
    # Saturday 02:00 UTC is still Friday evening in Santiago (UTC-3 in January)
    value = "2023-01-07T02:00:00.000Z"
    assert business_days(value, value) == 0
    assert business_days(value, value, tz="America/Santiago") == 1


def test_business_days_accepts_datetimes():
    start = datetime(2023, 1, 9, 10, tzinfo=UTC)
    end = datetime(2023, 1, 13, 10, tzinfo=UTC)
    assert business_days(start, end) == 5


def test_hours_between_invalid_or_inverted():
    assert hours_between("invalid-date", "2023-01-10") == 0
    assert hours_between("2023-01-10", "invalid-date") == 0
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-10T10:00:00.000Z") == 0
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-10T12:00:00.000Z") == 0


def test_hours_between():
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-10T13:00:00.000Z") == 1
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-11T12:00:00.000Z") == 24
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-10T13:30:00.000Z") == 1.5
    assert hours_between("2023-01-10T12:00:00.000Z", "2023-01-10T14:36:00.000Z") == 2.6
    assert hours_between("2022-12-31T23:00:00.000Z", "2023-01-01T01:00:00.000Z") == 2


def test_business_days_across_dst_gap():
    # Santiago skipped local midnight on 2022-09-11 (clocks jumped to 01:00)
    assert business_days("2022-09-11T12:00:00Z", "2022-09-12T12:00:00Z", tz="America/Santiago") == 1
    assert business_days("2022-09-11T15:00:00Z", "2022-09-13T12:00:00Z", tz="America/Santiago") == 2


def test_normalize_timestamp_rejects_non_scalars():
    assert normalize_timestamp(["2023-01-01", "2023-01-02"]) is None
    assert normalize_timestamp(("2023-01-01",)) is None
