from datetime import date
from types import SimpleNamespace

from worklog.core.phases import FILL_ACTUAL_END_WHEN_CLOSED, FILL_ACTUAL_START_WHEN_IN_PROGRESS
from worklog.services.stamping import StatusChanged, on_status_changing
from worklog.services.tenant_settings import TenantSettings

TODAY = date(2024, 6, 15)
ENABLED = TenantSettings(1, {FILL_ACTUAL_START_WHEN_IN_PROGRESS: "1", FILL_ACTUAL_END_WHEN_CLOSED: "true"})
DISABLED = TenantSettings(1, {FILL_ACTUAL_START_WHEN_IN_PROGRESS: "0"})


def _task(**kwargs):
    values = {"id": 7, "actual_start": None, "actual_end": None}
    values.update(kwargs)
    return SimpleNamespace(**values)


def _status(phase):
    return SimpleNamespace(name=phase.title(), phase=phase)


def test_in_progress_stamps_actual_start_once():
    task = _task()
    stamped = on_status_changing(StatusChanged(task, _status("todo"), _status("in_progress")), ENABLED, TODAY)
    assert stamped == ["actual_start"]
    assert task.actual_start == "2024-06-15"

    on_status_changing(StatusChanged(task, _status("todo"), _status("in_progress")), ENABLED, date(2024, 7, 1))
    assert task.actual_start == "2024-06-15"


def test_closed_stamps_actual_end_only():
    task = _task()
    on_status_changing(StatusChanged(task, None, _status("closed")), ENABLED, TODAY)
    assert task.actual_end == "2024-06-15"
    assert task.actual_start is None


def test_existing_actual_end_is_kept():
    task = _task(actual_end="2024-01-02")
    assert on_status_changing(StatusChanged(task, None, _status("closed")), ENABLED, TODAY) == []
    assert task.actual_end == "2024-01-02"


def test_disabled_settings_never_stamp():
    task = _task()
    for phase in ("todo", "in_progress", "closed"):
        on_status_changing(StatusChanged(task, None, _status(phase)), DISABLED, TODAY)
    assert task.actual_start is None
    assert task.actual_end is None


def test_todo_phase_does_nothing():
    task = _task()
    assert on_status_changing(StatusChanged(task, None, _status("todo")), ENABLED, TODAY) == []


def test_missing_status_is_skipped():
    task = _task()
    assert on_status_changing(StatusChanged(task, _status("todo"), None), ENABLED, TODAY) == []
    assert task.actual_start is None


def test_tenant_settings_coerce_flags():
    settings = TenantSettings(3, {"a": "yes", "b": "off", "c": 1, "d": None})
    assert settings.get("a") is True
    assert settings.get("b") is False
    assert settings.get("c") is True
    assert settings.get("d") is False
    assert settings.get("missing") is False
