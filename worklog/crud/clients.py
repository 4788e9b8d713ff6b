"""CRUD helpers for clients."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..models.client import Client
from ..models.project import Project
from ..models.task import Task
from ..models.work_session import WorkSession
from ..services.timecalc import utcnow_iso

CLIENT_FIELDS = ("email", "phone", "note")


def list_clients(db: Session, search: str | None = None, limit: int = 200, offset: int = 0):
    stmt = select(Client)
    if search:
        stmt = stmt.where(func.lower(Client.name).contains(search.strip().lower()))
    stmt = stmt.order_by(Client.name).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_client(db: Session, client_id: int) -> Client | None:
    return db.get(Client, client_id)


def ensure_client(db: Session, client_id: int | None) -> int | None:
    """Validate an optional client reference coming from a payload."""
    if client_id is None:
        return None
    if db.get(Client, client_id) is None:
        raise ValueError(f"Unknown client_id {client_id}")
    return client_id


def create_client(db: Session, payload: dict) -> Client:
    name = (payload.get("name") or "").strip()
    if not name:
        raise ValueError("name is required")
    now = utcnow_iso()
    client = Client(name=name, created_at=now, updated_at=now)
    for field in CLIENT_FIELDS:
        setattr(client, field, (payload.get(field) or None))
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


def update_client(db: Session, client: Client, payload: dict) -> Client:
    if "name" in payload:
        name = (payload.get("name") or "").strip()
        if not name:
            raise ValueError("name is required")
        client.name = name
    for field in CLIENT_FIELDS:
        if field in payload:
            setattr(client, field, payload.get(field) or None)
    client.updated_at = utcnow_iso()
    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client: Client) -> None:
    # Work history outlives the client record; only the link is dropped.
    for model in (Project, Task, WorkSession):
        db.execute(update(model).where(model.client_id == client.id).values(client_id=None))
    db.delete(client)
    db.commit()
