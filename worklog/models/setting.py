"""Per-company key/value settings."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text, UniqueConstraint

from ..db.session import Base


class CompanySetting(Base):
    __tablename__ = "company_settings"
    __table_args__ = (UniqueConstraint("company_id", "key", name="uq_company_settings_key"),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, nullable=False, index=True)
    key = Column(Text, nullable=False)
    value = Column(Text, nullable=True)


__all__ = ["CompanySetting"]
