from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from worklog.services.timecalc import TimerValidationError
from worklog.services.timers import TimerState, reanchor, reconcile, toggle_running

TZ = ZoneInfo("America/Chicago")
START = datetime(2024, 1, 1, 9, 0, tzinfo=TZ)


def test_fresh_running_session_is_left_alone():
    state = TimerState(start=START)
    assert reconcile(state, "start") is state


@pytest.mark.parametrize("duration", [1, 45, 90, 480, 1500])
def test_editing_duration_moves_end(duration):
    result = reconcile(TimerState(start=START, duration=duration), "duration")
    assert result.end == START + timedelta(minutes=duration)
    assert result.duration == duration
    assert result.is_running is False


def test_editing_end_recomputes_floored_duration():
    end = datetime(2024, 1, 1, 17, 0, 59, tzinfo=TZ)
    result = reconcile(TimerState(start=START, end=end), "end")
    assert result.end == end
    assert result.duration == 480
    assert result.time == "8h"
    assert result.is_running is False


def test_editing_start_keeps_duration():
    finished = reconcile(TimerState(start=START, duration=60), "duration")
    moved = reconcile(TimerState(start=START + timedelta(minutes=30), end=finished.end, duration=60), "start")
    assert moved.end == START + timedelta(minutes=90)
    assert moved.duration == 60


def test_zero_duration_reads_as_running():
    result = reconcile(TimerState(start=START, end=START), "end")
    assert result.duration == 0
    assert result.is_running is True
    assert result.time == "0m"


def test_end_before_start_is_rejected():
    with pytest.raises(TimerValidationError):
        reconcile(TimerState(start=START, end=START - timedelta(minutes=5)), "end")


def test_unknown_edited_field_is_rejected():
    with pytest.raises(TimerValidationError):
        reconcile(TimerState(start=START, duration=5), "rate")


def test_toggle_to_running_clears_end():
    finished = reconcile(TimerState(start=START, duration=30), "duration")
    running = toggle_running(finished, True, now=START + timedelta(hours=2))
    assert running.end is None
    assert running.duration == 0
    assert running.is_running is True


def test_toggle_to_finished_ends_at_now():
    now = datetime(2024, 1, 1, 10, 15, 42, tzinfo=TZ)
    finished = toggle_running(TimerState(start=START), False, now=now)
    assert finished.end == datetime(2024, 1, 1, 10, 15, tzinfo=TZ)
    assert finished.duration == 75
    assert finished.is_running is False


def test_reanchor_keeps_time_of_day():
    today = datetime(2024, 6, 15, 12, 30, tzinfo=TZ)
    moved = reanchor(datetime(2024, 1, 1, 9, 5, 7, tzinfo=TZ), today)
    assert moved == datetime(2024, 6, 15, 9, 5, 7, tzinfo=TZ)
