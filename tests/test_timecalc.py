from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from dateutil.relativedelta import relativedelta

from worklog.services.timecalc import (
    TimerValidationError,
    format_duration,
    minutes_between,
    parse_date,
    parse_interval,
    parse_iso,
)


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0m"), (None, "0m"), (45, "45m"), (60, "1h"), (90, "1h 30m"), (605, "10h 5m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_parse_iso_attaches_tenant_timezone_to_naive_values():
    dt = parse_iso("2024-01-01T09:00:00", "America/Chicago")
    assert dt == datetime(2024, 1, 1, 9, 0, tzinfo=ZoneInfo("America/Chicago"))


def test_parse_iso_accepts_zulu_suffix():
    dt = parse_iso("2024-01-01T15:00:00Z", "America/Chicago")
    assert dt.utcoffset().total_seconds() == 0


def test_parse_iso_rejects_garbage():
    with pytest.raises(TimerValidationError):
        parse_iso("next tuesday-ish", "UTC")


def test_minutes_between_floors_partial_minutes():
    start = datetime(2024, 1, 1, 9, 0, 0)
    assert minutes_between(start, datetime(2024, 1, 1, 9, 59, 59)) == 59


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1 day", relativedelta(days=1)),
        ("3 days", relativedelta(days=3)),
        ("2 weeks", relativedelta(weeks=2)),
        ("1 month", relativedelta(months=1)),
        ("1 Year", relativedelta(years=1)),
        ("90 minutes", relativedelta(minutes=90)),
    ],
)
def test_parse_interval(text, expected):
    assert parse_interval(text) == expected


@pytest.mark.parametrize("text", ["", "soon", "1 fortnight", "month"])
def test_parse_interval_rejects_unknown(text):
    with pytest.raises(ValueError):
        parse_interval(text)


def test_parse_date_truncates_timestamps():
    assert parse_date("2024-06-15T13:00:00") == date(2024, 6, 15)
    assert parse_date(None) is None
    with pytest.raises(ValueError):
        parse_date("15/06/2024")
