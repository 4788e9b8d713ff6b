from __future__ import annotations

from datetime import date, datetime

from .timecalc import parse_interval

POSTPONABLE_FIELDS = ("planned_start", "planned_end", "actual_start", "actual_end", "due_date")
# Deadlines that have already slipped restart from today instead of
# drifting further into the past.
CATCH_UP_FIELDS = ("planned_end", "due_date")


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def postponed_date(
    field: str,
    current: date | None,
    interval: str,
    *,
    today: date,
    from_now: bool = True,
) -> date | None:
    """Return the new value for ``field`` or ``None`` when it should stay unset."""
    if field not in POSTPONABLE_FIELDS:
        raise ValueError(f"field must be one of {', '.join(POSTPONABLE_FIELDS)}")
    if current is None:
        return None
    if (interval or "").strip().lower() == "today":
        return today

    delta = parse_interval(interval)
    if field in CATCH_UP_FIELDS:
        base = today if current <= today else current
    else:
        base = today if from_now else current
    return _as_date(base + delta)
