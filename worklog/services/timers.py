"""Work-session timer reconciliation.

A session's ``start``, ``end`` and ``duration`` have to agree with each other,
and ``is_running`` follows from them. Whenever one field is edited the others
are recomputed here. Nothing in this module touches the database so any
caller (an API route, a form backend, a CLI) can drive it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from .timecalc import TimerValidationError, format_duration, minutes_between

EDITED_FIELDS = ("start", "end", "duration")


@dataclass(frozen=True)
class TimerState:
    start: datetime
    end: datetime | None = None
    duration: int = 0
    time: str | None = None
    is_running: bool = True


def reconcile(state: TimerState, edited_field: str) -> TimerState:
    """Recompute the dependent timer fields after ``edited_field`` changed.

    Editing ``start`` or ``duration`` keeps the duration and moves ``end``;
    editing ``end`` keeps the end and recomputes the duration. A state with
    neither end nor duration is a fresh running session and is returned as-is.
    """
    if edited_field not in EDITED_FIELDS:
        raise TimerValidationError(f"edited_field must be one of {', '.join(EDITED_FIELDS)}")
    if state.start is None:
        raise TimerValidationError("start is required")
    duration = int(state.duration or 0)
    if duration < 0:
        raise TimerValidationError("duration must not be negative")
    if state.end is None and not duration:
        return state

    from_duration = edited_field != "end"
    if from_duration:
        end = state.start + timedelta(minutes=duration)
    else:
        end = state.end
        if end is None:
            raise TimerValidationError("end is required when editing end")
        if end < state.start:
            raise TimerValidationError("end must not be before start")

    duration = minutes_between(state.start, end)
    # Zero minutes reads as "still running", even with an end set.
    return replace(
        state,
        end=end,
        duration=duration,
        time=format_duration(duration),
        is_running=duration == 0,
    )


def toggle_running(state: TimerState, running: bool, now: datetime) -> TimerState:
    """Flip the running switch: resume clears the end, stop ends it at ``now``."""
    if running:
        return replace(state, end=None, duration=0, time=format_duration(0), is_running=True)
    stopped = replace(state, end=now.replace(second=0, microsecond=0), is_running=False)
    return reconcile(stopped, "end")


def reanchor(moment: datetime, today: datetime) -> datetime:
    """Keep ``moment``'s time of day but move it onto ``today``'s date."""
    local = moment.astimezone(today.tzinfo) if today.tzinfo and moment.tzinfo else moment
    return today.replace(
        hour=local.hour,
        minute=local.minute,
        second=local.second,
        microsecond=0,
    )
