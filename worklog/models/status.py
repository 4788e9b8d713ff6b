"""Task statuses. The display name is free text; ``phase`` is what logic keys on."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..core.phases import StatusPhase
from ..db.session import Base


class Status(Base):
    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    phase = Column(Text, nullable=False, default=StatusPhase.TODO.value, index=True)
    color = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


__all__ = ["Status"]
