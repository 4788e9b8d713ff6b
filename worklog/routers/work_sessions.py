from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..core.config import settings
from ..crud.work_sessions import (
    clone_work_session,
    clone_work_sessions,
    create_work_session,
    delete_work_session,
    finish_work_session,
    get_work_session,
    list_work_sessions,
    summarize_work_sessions,
    update_work_session,
)
from ..db.session import get_db
from ..schemas.work_session import (
    CloneRequest,
    CloneResult,
    ReconcileRequest,
    TimerOut,
    ToggleRequest,
    WorkSessionCreate,
    WorkSessionOut,
    WorkSessionSummary,
    WorkSessionUpdate,
)
from ..services.timecalc import now_local, parse_iso, to_iso
from ..services.timers import TimerState, reconcile, toggle_running

router = APIRouter(prefix="/api/v1/work-sessions", tags=["work-sessions"])

BASE_PATH = "/api/v1/work-sessions"


def _display(value: str | None) -> str | None:
    dt = parse_iso(value, settings.TZ)
    if dt is None:
        return None
    return dt.astimezone(ZoneInfo(settings.TZ)).strftime(settings.DATETIME_FORMAT)


def _serialize(ws) -> WorkSessionOut:
    return WorkSessionOut.model_validate(ws, from_attributes=True).model_copy(
        update={"start_display": _display(ws.start), "end_display": _display(ws.end)}
    )


def _timer_state(payload) -> TimerState:
    return TimerState(
        start=parse_iso(payload.start, settings.TZ),
        end=parse_iso(payload.end, settings.TZ),
        duration=int(payload.duration or 0),
        is_running=payload.end is None,
    )


def _timer_out(state: TimerState) -> TimerOut:
    return TimerOut(
        start=to_iso(state.start),
        end=to_iso(state.end),
        duration=state.duration,
        time=state.time,
        is_running=state.is_running,
    )


def _filters(
    client_id: int | None = Query(default=None),
    project_id: int | None = Query(default=None),
    task_id: int | None = Query(default=None),
    running: bool | None = Query(default=None),
    start_from: str | None = Query(default=None),
    start_to: str | None = Query(default=None),
    q: str | None = Query(default=None, max_length=200),
) -> dict:
    return {
        "client_id": client_id,
        "project_id": project_id,
        "task_id": task_id,
        "running": running,
        "start_from": start_from,
        "start_to": start_to,
        "q": q,
    }


@router.get("", response_model=list[WorkSessionOut])
def api_list(
    filters: dict = Depends(_filters),
    limit: int = Query(default=200, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    try:
        records = list_work_sessions(db, limit=limit, offset=offset, **filters)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [_serialize(record) for record in records]


@router.get("/summary", response_model=WorkSessionSummary)
def api_summary(filters: dict = Depends(_filters), db: Session = Depends(get_db)):
    try:
        return summarize_work_sessions(db, **filters)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/reconcile", response_model=TimerOut)
def api_reconcile(payload: ReconcileRequest):
    """Recompute end/duration/is_running after one timer field was edited."""
    try:
        state = reconcile(_timer_state(payload), payload.edited_field)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _timer_out(state)


@router.post("/toggle", response_model=TimerOut)
def api_toggle(payload: ToggleRequest):
    try:
        state = toggle_running(_timer_state(payload), payload.is_running, now_local(settings.TZ))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _timer_out(state)


@router.post("/clone", response_model=list[CloneResult], status_code=201)
def api_clone_many(payload: CloneRequest, db: Session = Depends(get_db)):
    records = []
    for session_id in payload.ids:
        record = get_work_session(db, session_id)
        if not record:
            raise HTTPException(404, f"Work session {session_id} not found")
        records.append(record)
    clones = clone_work_sessions(db, records)
    return [
        CloneResult(source_id=source.id, id=clone.id, url=f"{BASE_PATH}/{clone.id}")
        for source, clone in zip(records, clones)
    ]


@router.post("", response_model=WorkSessionOut, status_code=201)
def api_create(payload: WorkSessionCreate, db: Session = Depends(get_db)):
    try:
        record = create_work_session(db, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _serialize(record)


@router.get("/{session_id}", response_model=WorkSessionOut)
def api_get(session_id: int, db: Session = Depends(get_db)):
    record = get_work_session(db, session_id)
    if not record:
        raise HTTPException(404, "Not found")
    return _serialize(record)


@router.patch("/{session_id}", response_model=WorkSessionOut)
def api_update(session_id: int, payload: WorkSessionUpdate, db: Session = Depends(get_db)):
    record = get_work_session(db, session_id)
    if not record:
        raise HTTPException(404, "Not found")
    try:
        updated = update_work_session(db, record, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _serialize(updated)


@router.post("/{session_id}/finish", response_model=WorkSessionOut)
def api_finish(session_id: int, db: Session = Depends(get_db)):
    record = get_work_session(db, session_id)
    if not record:
        raise HTTPException(404, "Not found")
    try:
        finished = finish_work_session(db, record)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _serialize(finished)


@router.post("/{session_id}/clone", response_model=CloneResult, status_code=201)
def api_clone(session_id: int, db: Session = Depends(get_db)):
    record = get_work_session(db, session_id)
    if not record:
        raise HTTPException(404, "Not found")
    clone = clone_work_session(db, record)
    return CloneResult(source_id=record.id, id=clone.id, url=f"{BASE_PATH}/{clone.id}")


@router.delete("/{session_id}")
def api_delete(session_id: int, db: Session = Depends(get_db)):
    record = get_work_session(db, session_id)
    if not record:
        raise HTTPException(404, "Not found")
    delete_work_session(db, record)
    return {"status": "deleted"}
