"""Pydantic schemas for task statuses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..core.phases import PHASE_CHOICES

PHASE_PATTERN = f"^({'|'.join(PHASE_CHOICES)})$"


class StatusBase(BaseModel):
    name: str
    phase: str = Field(default="todo", pattern=PHASE_PATTERN)
    color: Optional[str] = None
    sort_order: int = 0


class StatusCreate(StatusBase):
    pass


class StatusUpdate(BaseModel):
    name: Optional[str] = None
    phase: Optional[str] = Field(default=None, pattern=PHASE_PATTERN)
    color: Optional[str] = None
    sort_order: Optional[int] = None


class StatusOut(StatusBase):
    id: int

    class Config:
        from_attributes = True
