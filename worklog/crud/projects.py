"""CRUD helpers for projects."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from ..models.project import Project
from ..models.task import Task
from ..models.work_session import WorkSession
from ..services.timecalc import utcnow_iso
from .clients import ensure_client


def list_projects(db: Session, client_id: int | None = None, limit: int = 200, offset: int = 0):
    stmt = select(Project).options(selectinload(Project.client))
    if client_id is not None:
        stmt = stmt.where(Project.client_id == client_id)
    stmt = stmt.order_by(Project.name).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_project(db: Session, project_id: int) -> Project | None:
    stmt = select(Project).options(selectinload(Project.client)).where(Project.id == project_id)
    return db.execute(stmt).scalars().first()


def ensure_project(db: Session, project_id: int | None) -> int | None:
    if project_id is None:
        return None
    if db.get(Project, project_id) is None:
        raise ValueError(f"Unknown project_id {project_id}")
    return project_id


def create_project(db: Session, payload: dict) -> Project:
    name = (payload.get("name") or "").strip()
    if not name:
        raise ValueError("name is required")
    now = utcnow_iso()
    project = Project(
        name=name,
        client_id=ensure_client(db, payload.get("client_id")),
        description=(payload.get("description") or None),
        created_at=now,
        updated_at=now,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def update_project(db: Session, project: Project, payload: dict) -> Project:
    if "name" in payload:
        name = (payload.get("name") or "").strip()
        if not name:
            raise ValueError("name is required")
        project.name = name
    if "client_id" in payload:
        project.client_id = ensure_client(db, payload.get("client_id"))
    if "description" in payload:
        project.description = payload.get("description") or None
    project.updated_at = utcnow_iso()
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project: Project) -> None:
    for model in (Task, WorkSession):
        db.execute(update(model).where(model.project_id == project.id).values(project_id=None))
    db.delete(project)
    db.commit()
