"""CRUD helpers for tasks, including status stamping and postponement."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from ..core.config import settings
from ..core.phases import OPEN_PHASES, StatusPhase
from ..models.status import Status
from ..models.task import Task
from ..models.task_activity import STATUS_CHANGED, TaskActivity
from ..models.work_session import WorkSession
from ..services.postpone import POSTPONABLE_FIELDS, postponed_date
from ..services.stamping import StatusChanged, on_status_changing
from ..services.tenant_settings import TenantSettings
from ..services.timecalc import parse_date, today_local, utcnow_iso
from .clients import ensure_client
from .projects import ensure_project
from .statuses import get_status

logger = logging.getLogger(__name__)

DATE_FIELDS = POSTPONABLE_FIELDS
TASK_STATES = ("opened", "closed")


def list_tasks(
    db: Session,
    project_id: int | None = None,
    state: str | None = None,
    parent_id: int | None = None,
    limit: int = 200,
    offset: int = 0,
):
    stmt = select(Task).options(selectinload(Task.status))
    if project_id is not None:
        stmt = stmt.where(Task.project_id == project_id)
    if parent_id is not None:
        stmt = stmt.where(Task.parent_id == parent_id)
    if state:
        if state not in TASK_STATES:
            raise ValueError(f"state must be one of {', '.join(TASK_STATES)}")
        phases = OPEN_PHASES if state == "opened" else (StatusPhase.CLOSED.value,)
        stmt = stmt.join(Status, Task.status_id == Status.id).where(Status.phase.in_(phases))
    stmt = stmt.order_by(Task.due_date.is_(None), Task.due_date, Task.id).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_task(db: Session, task_id: int) -> Task | None:
    stmt = select(Task).options(selectinload(Task.status)).where(Task.id == task_id)
    return db.execute(stmt).scalars().first()


def _ensure_parent(db: Session, task: Task | None, parent_id: int | None) -> int | None:
    if parent_id is None:
        return None
    parent = db.get(Task, parent_id)
    if parent is None:
        raise ValueError(f"Unknown parent_id {parent_id}")
    if task is not None and task.id is not None:
        # Walk up from the new parent; meeting ourselves means a cycle.
        seen: set[int] = set()
        node = parent
        while node is not None and node.id not in seen:
            if node.id == task.id:
                raise ValueError("parent_id would create a cycle")
            seen.add(node.id)
            node = db.get(Task, node.parent_id) if node.parent_id else None
    return parent_id


def _ensure_status(db: Session, status_id: int | None) -> int | None:
    if status_id is None:
        return None
    if get_status(db, status_id) is None:
        raise ValueError(f"Unknown status_id {status_id}")
    return status_id


def _apply_dates(task: Task, payload: dict) -> None:
    for field in DATE_FIELDS:
        if field in payload:
            value = parse_date(payload.get(field))
            setattr(task, field, value.isoformat() if value else None)


def _stamp_status_change(
    db: Session,
    task: Task,
    old_status_id: int | None,
    tenant: TenantSettings,
    today: date | None,
) -> None:
    if task.status_id == old_status_id:
        return
    event = StatusChanged(
        task=task,
        old_status=get_status(db, old_status_id),
        new_status=get_status(db, task.status_id),
    )
    on_status_changing(event, tenant, today or today_local(settings.TZ))
    old_name = event.old_status.name if event.old_status else None
    new_name = event.new_status.name if event.new_status else None
    task.activities.append(
        TaskActivity(
            event=STATUS_CHANGED,
            old_status=old_name,
            new_status=new_name,
            created_at=utcnow_iso(),
        )
    )
    logger.info(
        "task.status_changed",
        extra={"extra_data": {"task_id": task.id, "old_status": old_name, "new_status": new_name}},
    )


def list_task_activities(db: Session, task_id: int):
    stmt = select(TaskActivity).where(TaskActivity.task_id == task_id).order_by(TaskActivity.id)
    return db.execute(stmt).scalars().all()


def create_task(db: Session, payload: dict, tenant: TenantSettings, today: date | None = None) -> Task:
    title = (payload.get("title") or "").strip()
    if not title:
        raise ValueError("title is required")
    now = utcnow_iso()
    task = Task(
        title=title,
        description=(payload.get("description") or None),
        client_id=ensure_client(db, payload.get("client_id")),
        project_id=ensure_project(db, payload.get("project_id")),
        status_id=_ensure_status(db, payload.get("status_id")),
        parent_id=_ensure_parent(db, None, payload.get("parent_id")),
        created_at=now,
        updated_at=now,
    )
    _apply_dates(task, payload)
    task.checklist = payload.get("checklist")
    _stamp_status_change(db, task, None, tenant, today)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task: Task, payload: dict, tenant: TenantSettings, today: date | None = None) -> Task:
    old_status_id = task.status_id
    if "title" in payload:
        title = (payload.get("title") or "").strip()
        if not title:
            raise ValueError("title is required")
        task.title = title
    if "description" in payload:
        task.description = payload.get("description") or None
    if "client_id" in payload:
        task.client_id = ensure_client(db, payload.get("client_id"))
    if "project_id" in payload:
        task.project_id = ensure_project(db, payload.get("project_id"))
    if "status_id" in payload:
        task.status_id = _ensure_status(db, payload.get("status_id"))
    if "parent_id" in payload:
        task.parent_id = _ensure_parent(db, task, payload.get("parent_id"))
    if "checklist" in payload:
        task.checklist = payload.get("checklist")
    _apply_dates(task, payload)
    _stamp_status_change(db, task, old_status_id, tenant, today)
    task.updated_at = utcnow_iso()
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task) -> None:
    db.execute(update(Task).where(Task.parent_id == task.id).values(parent_id=task.parent_id))
    db.execute(update(WorkSession).where(WorkSession.task_id == task.id).values(task_id=None))
    db.delete(task)
    db.commit()


def postpone_task(
    db: Session,
    task: Task,
    field: str,
    interval: str,
    from_now: bool = True,
    today: date | None = None,
) -> Task:
    """Push ``field`` forward by ``interval``; unset dates are left alone."""
    current = parse_date(getattr(task, field, None)) if field in POSTPONABLE_FIELDS else None
    new_value = postponed_date(
        field,
        current,
        interval,
        today=today or today_local(settings.TZ),
        from_now=from_now,
    )
    if new_value is None:
        return task
    setattr(task, field, new_value.isoformat())
    task.updated_at = utcnow_iso()
    db.commit()
    db.refresh(task)
    logger.info(
        "task.postponed",
        extra={"extra_data": {"task_id": task.id, "field": field, "interval": interval, "value": new_value.isoformat()}},
    )
    return task
