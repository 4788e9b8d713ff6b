"""SQLAlchemy model for tasks.

Dates are stored as ``YYYY-MM-DD`` text. ``actual_start`` and ``actual_end``
can be stamped automatically on status changes (see services.stamping).
"""

from __future__ import annotations

import json

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class Task(Base):
    __tablename__ = "tasks"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    status_id = Column(Integer, ForeignKey("statuses.id"), nullable=True, index=True)
    parent_id = Column(Integer, ForeignKey("tasks.id"), nullable=True, index=True)

    planned_start = Column(Text, nullable=True)
    planned_end = Column(Text, nullable=True)
    actual_start = Column(Text, nullable=True)
    actual_end = Column(Text, nullable=True)
    due_date = Column(Text, nullable=True)

    checklist_blob = Column("checklist", Text, nullable=True)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    client = relationship("Client")
    project = relationship("Project")
    status = relationship("Status")
    parent = relationship("Task", remote_side=[id], back_populates="children")
    children = relationship("Task", back_populates="parent")
    activities = relationship(
        "TaskActivity",
        cascade="all, delete-orphan",
        order_by="TaskActivity.id",
    )

    @property
    def checklist(self) -> list[dict[str, object]]:
        raw = self.checklist_blob
        if not raw:
            return []
        try:
            decoded = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return []
        if not isinstance(decoded, list):
            return []
        return [dict(item) for item in decoded if isinstance(item, dict)]

    @checklist.setter
    def checklist(self, value: list[dict[str, object]] | None) -> None:
        if not value:
            self.checklist_blob = None
            return
        if not isinstance(value, list):
            raise ValueError("checklist must be a list of objects")
        cleaned: list[dict[str, object]] = []
        for item in value:
            if not isinstance(item, dict):
                continue
            label = str(item.get("label") or "").strip()
            if not label:
                continue
            cleaned.append({"label": label, "done": bool(item.get("done"))})
        self.checklist_blob = json.dumps(cleaned) if cleaned else None


__all__ = ["Task"]
