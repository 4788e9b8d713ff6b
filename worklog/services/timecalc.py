from __future__ import annotations

import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta


class TimerValidationError(ValueError):
    """A timestamp or duration that cannot take part in timer math."""


INTERVAL_RE = re.compile(r"^\s*([+-]?\d+)\s*([a-z]+?)s?\s*$", re.IGNORECASE)
INTERVAL_UNITS = {
    "minute": "minutes",
    "min": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def parse_iso(ts: str | datetime | None, tz: str) -> datetime | None:
    """Parse an ISO-8601 timestamp string.
    If naive, attach the provided tz. Returns None if ts is falsy.
    Raises TimerValidationError on anything unparseable.
    """
    if not ts:
        return None
    if isinstance(ts, datetime):
        dt = ts
    else:
        try:
            dt = datetime.fromisoformat(str(ts).strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise TimerValidationError(f"Invalid timestamp '{ts}'") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=ZoneInfo(tz))
    return dt


def to_iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.isoformat(timespec="seconds")


def parse_date(value: str | date | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` date; datetimes collapse to their date part."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid date '{value}'") from exc


def now_local(tz: str) -> datetime:
    return datetime.now(ZoneInfo(tz))


def today_local(tz: str) -> date:
    return now_local(tz).date()


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, floored."""
    return int((end - start).total_seconds() // 60)


def format_duration(minutes: int | None) -> str:
    """Render minutes the way list columns show them: ``1h 30m``, ``45m``."""
    total = int(minutes or 0)
    sign = "-" if total < 0 else ""
    hours, mins = divmod(abs(total), 60)
    if hours:
        return f"{sign}{hours}h {mins}m" if mins else f"{sign}{hours}h"
    return f"{sign}{mins}m"


def parse_interval(interval: str) -> relativedelta:
    """Turn ``"2 weeks"`` or ``"1 month"`` into a relativedelta."""
    match = INTERVAL_RE.match(interval or "")
    if not match:
        raise ValueError(f"Unsupported interval '{interval}'")
    amount, unit = int(match.group(1)), match.group(2).lower()
    key = INTERVAL_UNITS.get(unit)
    if key is None:
        raise ValueError(f"Unsupported interval unit '{unit}'")
    return relativedelta(**{key: amount})


def utcnow_iso() -> str:
    """Row audit timestamp (``created_at``/``updated_at``)."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
