"""Status phases and the tenant setting keys that react to them."""

from __future__ import annotations

from enum import Enum


class StatusPhase(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


PHASE_CHOICES = tuple(phase.value for phase in StatusPhase)
OPEN_PHASES = (StatusPhase.TODO.value, StatusPhase.IN_PROGRESS.value)

FILL_ACTUAL_START_WHEN_IN_PROGRESS = "tasks_fill_actual_start_date_when_in_progress"
FILL_ACTUAL_END_WHEN_CLOSED = "tasks_fill_actual_end_date_when_closed"

SETTING_KEYS = (
    FILL_ACTUAL_START_WHEN_IN_PROGRESS,
    FILL_ACTUAL_END_WHEN_CLOSED,
)


def normalize_phase(value: str | StatusPhase | None) -> str:
    """Return a lowercase phase value with a safe default."""

    if isinstance(value, StatusPhase):
        return value.value
    normalized = (value or StatusPhase.TODO.value).strip().lower()
    if normalized not in PHASE_CHOICES:
        raise ValueError(f"phase must be one of {', '.join(PHASE_CHOICES)}")
    return normalized


__all__ = [
    "FILL_ACTUAL_END_WHEN_CLOSED",
    "FILL_ACTUAL_START_WHEN_IN_PROGRESS",
    "OPEN_PHASES",
    "PHASE_CHOICES",
    "SETTING_KEYS",
    "StatusPhase",
    "normalize_phase",
]
