"""Status-change history for tasks."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text

from ..db.session import Base

STATUS_CHANGED = "status_changed"


class TaskActivity(Base):
    __tablename__ = "task_activities"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    event = Column(Text, nullable=False, default=STATUS_CHANGED)
    old_status = Column(Text, nullable=True)
    new_status = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False)


__all__ = ["STATUS_CHANGED", "TaskActivity"]
