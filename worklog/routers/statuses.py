from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..core.errors import RecordInUseError
from ..crud.statuses import create_status, delete_status, get_status, list_statuses, update_status
from ..db.session import get_db
from ..schemas.status import StatusCreate, StatusOut, StatusUpdate

router = APIRouter(prefix="/api/v1/statuses", tags=["statuses"])


@router.get("", response_model=list[StatusOut])
def api_list_statuses(phase: str | None = Query(default=None), db: Session = Depends(get_db)):
    try:
        return list_statuses(db, phase=phase)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("", response_model=StatusOut, status_code=201)
def api_create_status(payload: StatusCreate, db: Session = Depends(get_db)):
    try:
        return create_status(db, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/{status_id}", response_model=StatusOut)
def api_get_status(status_id: int, db: Session = Depends(get_db)):
    status = get_status(db, status_id)
    if not status:
        raise HTTPException(404, "Not found")
    return status


@router.patch("/{status_id}", response_model=StatusOut)
def api_update_status(status_id: int, payload: StatusUpdate, db: Session = Depends(get_db)):
    status = get_status(db, status_id)
    if not status:
        raise HTTPException(404, "Not found")
    try:
        return update_status(db, status, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.delete("/{status_id}")
def api_delete_status(status_id: int, db: Session = Depends(get_db)):
    status = get_status(db, status_id)
    if not status:
        raise HTTPException(404, "Not found")
    try:
        delete_status(db, status)
    except RecordInUseError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "deleted"}
