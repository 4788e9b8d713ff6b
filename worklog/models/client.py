"""SQLAlchemy model for the clients that projects, tasks and sessions bill to."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class Client(Base):
    __tablename__ = "clients"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False, index=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    projects = relationship("Project", back_populates="client")

    @property
    def label_name(self) -> str:
        if self.email:
            return f"{self.name} ({self.email})"
        return self.name


__all__ = ["Client"]
