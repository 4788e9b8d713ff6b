from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..crud.tasks import (
    create_task,
    delete_task,
    get_task,
    list_task_activities,
    list_tasks,
    postpone_task,
    update_task,
)
from ..db.session import get_db
from ..deps.tenant import get_tenant_settings
from ..schemas.task import PostponeRequest, TaskActivityOut, TaskCreate, TaskOut, TaskUpdate
from ..services.tenant_settings import TenantSettings

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def _task_to_schema(task) -> TaskOut:
    status = task.status
    return TaskOut.model_validate(task, from_attributes=True).model_copy(
        update={
            "status_name": status.name if status else None,
            "phase": status.phase if status else None,
        }
    )


def _task_payload(payload) -> dict:
    data = payload.model_dump(exclude_unset=True)
    if data.get("checklist") is not None:
        data["checklist"] = [dict(item) for item in data["checklist"]]
    return data


@router.get("", response_model=list[TaskOut])
def api_list_tasks(
    project_id: int | None = Query(default=None),
    state: str | None = Query(default=None, pattern="^(opened|closed)$"),
    parent_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    tasks = list_tasks(db, project_id=project_id, state=state, parent_id=parent_id, limit=limit, offset=offset)
    return [_task_to_schema(task) for task in tasks]


@router.post("", response_model=TaskOut, status_code=201)
def api_create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    tenant: TenantSettings = Depends(get_tenant_settings),
):
    try:
        task = create_task(db, _task_payload(payload), tenant)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _task_to_schema(task)


@router.get("/{task_id}", response_model=TaskOut)
def api_get_task(task_id: int, db: Session = Depends(get_db)):
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Not found")
    return _task_to_schema(task)


@router.patch("/{task_id}", response_model=TaskOut)
def api_update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    tenant: TenantSettings = Depends(get_tenant_settings),
):
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Not found")
    try:
        updated = update_task(db, task, _task_payload(payload), tenant)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _task_to_schema(updated)


@router.post("/{task_id}/postpone", response_model=TaskOut)
def api_postpone_task(task_id: int, payload: PostponeRequest, db: Session = Depends(get_db)):
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Not found")
    try:
        updated = postpone_task(db, task, payload.field, payload.interval, from_now=payload.from_now)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _task_to_schema(updated)


@router.get("/{task_id}/activity", response_model=list[TaskActivityOut])
def api_task_activity(task_id: int, db: Session = Depends(get_db)):
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Not found")
    return [TaskActivityOut.model_validate(entry, from_attributes=True) for entry in list_task_activities(db, task_id)]


@router.delete("/{task_id}")
def api_delete_task(task_id: int, db: Session = Depends(get_db)):
    task = get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Not found")
    delete_task(db, task)
    return {"status": "deleted"}
