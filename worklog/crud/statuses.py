"""CRUD helpers for task statuses."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import RecordInUseError
from ..core.phases import normalize_phase
from ..models.status import Status
from ..models.task import Task


def list_statuses(db: Session, phase: str | None = None):
    stmt = select(Status)
    if phase:
        stmt = stmt.where(Status.phase == normalize_phase(phase))
    stmt = stmt.order_by(Status.sort_order, Status.name)
    return db.execute(stmt).scalars().all()


def get_status(db: Session, status_id: int | None) -> Status | None:
    if status_id is None:
        return None
    return db.get(Status, status_id)


def create_status(db: Session, payload: dict) -> Status:
    name = (payload.get("name") or "").strip()
    if not name:
        raise ValueError("name is required")
    status = Status(
        name=name,
        phase=normalize_phase(payload.get("phase")),
        color=(payload.get("color") or None),
        sort_order=int(payload.get("sort_order") or 0),
    )
    db.add(status)
    db.commit()
    db.refresh(status)
    return status


def update_status(db: Session, status: Status, payload: dict) -> Status:
    if "name" in payload:
        name = (payload.get("name") or "").strip()
        if not name:
            raise ValueError("name is required")
        status.name = name
    if "phase" in payload:
        status.phase = normalize_phase(payload.get("phase"))
    if "color" in payload:
        status.color = payload.get("color") or None
    if "sort_order" in payload:
        status.sort_order = int(payload.get("sort_order") or 0)
    db.commit()
    db.refresh(status)
    return status


def delete_status(db: Session, status: Status) -> None:
    in_use = db.execute(select(func.count(Task.id)).where(Task.status_id == status.id)).scalar_one()
    if in_use:
        raise RecordInUseError(f"Status is used by {in_use} task(s)")
    db.delete(status)
    db.commit()
