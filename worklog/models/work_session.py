"""SQLAlchemy model for timed work sessions.

``start`` and ``end`` hold ISO-8601 timestamps with their UTC offset. A null
``end`` means the timer is still running.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base
from ..services.timecalc import format_duration


class WorkSession(Base):
    __tablename__ = "work_sessions"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    start = Column(Text, nullable=False, index=True)
    end = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False, default=0)
    is_running = Column(Integer, nullable=False, default=1)

    rate = Column(Text, nullable=True)
    value = Column(Text, nullable=True)
    currency = Column(Text, nullable=True)

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=True, index=True)

    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    client = relationship("Client")
    project = relationship("Project")
    task = relationship("Task")

    @property
    def time(self) -> str:
        return format_duration(self.duration)


__all__ = ["WorkSession"]
