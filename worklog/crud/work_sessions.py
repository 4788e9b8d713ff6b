"""CRUD helpers for work sessions.

Every write runs the timer reconciliation so stored rows always satisfy
``end == start + duration`` once a session is finished. Timestamps are
stored in UTC so that text comparisons in filters order correctly; the
tenant timezone only matters for display and for clone re-anchoring.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable
from zoneinfo import ZoneInfo

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.task import Task
from ..models.work_session import WorkSession
from ..services.timecalc import (
    format_duration,
    now_local,
    parse_iso,
    to_iso,
    utcnow_iso,
)
from ..services.timers import TimerState, reanchor, reconcile, toggle_running
from .clients import ensure_client
from .projects import ensure_project

logger = logging.getLogger(__name__)

SIXTY = Decimal("60")
TWOPLACES = Decimal("0.01")
# Columns carried over verbatim by clone.
CLONED_FIELDS = (
    "title",
    "description",
    "rate",
    "currency",
    "client_id",
    "project_id",
    "task_id",
)


def _to_decimal(value: object) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        cleaned = value.strip().replace("$", "").replace(",", "")
        if not cleaned:
            return None
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None
    return None


def _format_decimal(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return format(value.quantize(TWOPLACES, rounding=ROUND_HALF_UP), "f")


def _normalize_rate(value: object) -> str | None:
    if value is None or value == "":
        return None
    amount = _to_decimal(value)
    if amount is None:
        raise ValueError(f"rate must be a number, got '{value}'")
    if amount < 0:
        raise ValueError("rate must not be negative")
    return _format_decimal(amount)


def _ensure_task(db: Session, task_id: int | None) -> int | None:
    if task_id is None:
        return None
    if db.get(Task, task_id) is None:
        raise ValueError(f"Unknown task_id {task_id}")
    return task_id


def _to_utc_iso(dt: datetime | None) -> str | None:
    return to_iso(dt.astimezone(timezone.utc)) if dt is not None else None


def _state_of(ws: WorkSession) -> TimerState:
    return TimerState(
        start=parse_iso(ws.start, settings.TZ),
        end=parse_iso(ws.end, settings.TZ),
        duration=int(ws.duration or 0),
        is_running=bool(ws.is_running),
    )


def _store_state(ws: WorkSession, state: TimerState) -> None:
    ws.start = _to_utc_iso(state.start)
    ws.end = _to_utc_iso(state.end)
    ws.duration = int(state.duration or 0)
    ws.is_running = 1 if state.is_running else 0


def _apply_billing(ws: WorkSession) -> None:
    rate = _to_decimal(ws.rate)
    if rate is None:
        ws.value = None
    else:
        ws.value = _format_decimal(rate * Decimal(int(ws.duration or 0)) / SIXTY)
    ws.currency = (ws.currency or settings.DEFAULT_CURRENCY).upper()


def _edited_field(payload: dict) -> str:
    explicit = payload.get("edited_field")
    if explicit:
        return explicit
    if "end" in payload and "duration" not in payload:
        return "end"
    return "duration"


def _apply_timer(ws: WorkSession, payload: dict, now: datetime) -> None:
    state = _state_of(ws) if ws.start else None
    start = parse_iso(payload["start"], settings.TZ) if payload.get("start") else None
    if state is None:
        state = TimerState(start=start or now.replace(second=0, microsecond=0))
    elif start is not None:
        state = replace(state, start=start)
    if "end" in payload:
        state = replace(state, end=parse_iso(payload.get("end"), settings.TZ))
    if "duration" in payload:
        state = replace(state, duration=int(payload.get("duration") or 0))

    running = payload.get("is_running")
    if running is None and "end" in payload and not payload.get("end"):
        # Clearing the end resumes the timer.
        running = True
    if running is True:
        state = toggle_running(state, True, now)
    elif running is False and state.end is None and not state.duration:
        state = toggle_running(state, False, now)
    else:
        state = reconcile(state, _edited_field(payload))
    _store_state(ws, state)


def _filtered_stmt(
    client_id: int | None = None,
    project_id: int | None = None,
    task_id: int | None = None,
    running: bool | None = None,
    start_from: str | None = None,
    start_to: str | None = None,
    q: str | None = None,
):
    stmt = select(WorkSession)
    if q and q.strip():
        stmt = stmt.where(WorkSession.title.ilike(f"%{q.strip()}%"))
    if client_id is not None:
        stmt = stmt.where(WorkSession.client_id == client_id)
    if project_id is not None:
        stmt = stmt.where(WorkSession.project_id == project_id)
    if task_id is not None:
        stmt = stmt.where(WorkSession.task_id == task_id)
    if running is not None:
        stmt = stmt.where(WorkSession.is_running == (1 if running else 0))
    if start_from:
        stmt = stmt.where(WorkSession.start >= _to_utc_iso(parse_iso(start_from, settings.TZ)))
    if start_to:
        stmt = stmt.where(WorkSession.start <= _to_utc_iso(parse_iso(start_to, settings.TZ)))
    return stmt


def list_work_sessions(db: Session, limit: int = 200, offset: int = 0, **filters):
    stmt = _filtered_stmt(**filters).order_by(desc(WorkSession.start)).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def summarize_work_sessions(db: Session, **filters) -> dict[str, object]:
    """Total time and value over the sessions matching ``filters``."""
    rows = db.execute(_filtered_stmt(**filters)).scalars().all()
    minutes = sum(int(row.duration or 0) for row in rows)
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for row in rows:
        value = _to_decimal(row.value)
        if value is not None:
            totals[row.currency or settings.DEFAULT_CURRENCY] += value
    return {
        "count": len(rows),
        "duration": minutes,
        "time": format_duration(minutes),
        "value_by_currency": {currency: _format_decimal(total) for currency, total in sorted(totals.items())},
    }


def get_work_session(db: Session, session_id: int) -> WorkSession | None:
    return db.get(WorkSession, session_id)


def create_work_session(db: Session, payload: dict, now: datetime | None = None) -> WorkSession:
    title = (payload.get("title") or "").strip()
    if not title:
        raise ValueError("title is required")
    stamp = utcnow_iso()
    ws = WorkSession(
        title=title,
        description=(payload.get("description") or None),
        rate=_normalize_rate(payload.get("rate")),
        currency=(payload.get("currency") or None),
        client_id=ensure_client(db, payload.get("client_id")),
        project_id=ensure_project(db, payload.get("project_id")),
        task_id=_ensure_task(db, payload.get("task_id")),
        created_at=stamp,
        updated_at=stamp,
    )
    _apply_timer(ws, payload, now or now_local(settings.TZ))
    _apply_billing(ws)
    db.add(ws)
    db.commit()
    db.refresh(ws)
    return ws


def update_work_session(db: Session, ws: WorkSession, payload: dict, now: datetime | None = None) -> WorkSession:
    if "title" in payload:
        title = (payload.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        ws.title = title
    if "description" in payload:
        ws.description = payload.get("description") or None
    if "rate" in payload:
        ws.rate = _normalize_rate(payload.get("rate"))
    if "currency" in payload:
        ws.currency = payload.get("currency") or None
    if "client_id" in payload:
        ws.client_id = ensure_client(db, payload.get("client_id"))
    if "project_id" in payload:
        ws.project_id = ensure_project(db, payload.get("project_id"))
    if "task_id" in payload:
        ws.task_id = _ensure_task(db, payload.get("task_id"))
    if any(k in payload for k in ("start", "end", "duration", "is_running")):
        _apply_timer(ws, payload, now or now_local(settings.TZ))
    _apply_billing(ws)
    ws.updated_at = utcnow_iso()
    db.commit()
    db.refresh(ws)
    return ws


def delete_work_session(db: Session, ws: WorkSession) -> None:
    db.delete(ws)
    db.commit()


def finish_work_session(db: Session, ws: WorkSession, now: datetime | None = None) -> WorkSession:
    """Stop a running timer at ``now``. Sessions that are not running are untouched."""
    if not ws.is_running:
        return ws
    state = toggle_running(_state_of(ws), False, now or now_local(settings.TZ))
    _store_state(ws, state)
    _apply_billing(ws)
    ws.updated_at = utcnow_iso()
    db.commit()
    db.refresh(ws)
    logger.info(
        "work_session.finished",
        extra={"extra_data": {"work_session_id": ws.id, "duration": ws.duration}},
    )
    return ws


def clone_work_session(db: Session, ws: WorkSession, now: datetime | None = None) -> WorkSession:
    """Duplicate ``ws`` onto today's date, keeping its times of day."""
    today = (now or now_local(settings.TZ)).astimezone(ZoneInfo(settings.TZ))
    source = _state_of(ws)
    start = reanchor(source.start, today)
    end = reanchor(source.end, today) if source.end is not None else None
    if end is not None and end < start:
        # The source session ran past midnight.
        end += timedelta(days=1)

    stamp = utcnow_iso()
    clone = WorkSession(**{field: getattr(ws, field) for field in CLONED_FIELDS})
    clone.created_at = stamp
    clone.updated_at = stamp
    if end is None:
        state = TimerState(start=start)
    else:
        state = reconcile(TimerState(start=start, end=end, duration=source.duration), "end")
    _store_state(clone, state)
    _apply_billing(clone)
    db.add(clone)
    db.commit()
    db.refresh(clone)
    logger.info(
        "work_session.cloned",
        extra={"extra_data": {"source_id": ws.id, "work_session_id": clone.id}},
    )
    return clone


def clone_work_sessions(db: Session, sessions: Iterable[WorkSession], now: datetime | None = None) -> list[WorkSession]:
    """Clone each session on its own commit; a failure leaves earlier clones saved."""
    return [clone_work_session(db, ws, now=now) for ws in sessions]


__all__ = [
    "clone_work_session",
    "clone_work_sessions",
    "create_work_session",
    "delete_work_session",
    "finish_work_session",
    "get_work_session",
    "list_work_sessions",
    "summarize_work_sessions",
    "update_work_session",
]
