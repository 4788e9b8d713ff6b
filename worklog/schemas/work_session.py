"""Pydantic schemas for work sessions and the timer endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..services.timers import EDITED_FIELDS

EDITED_FIELD_PATTERN = f"^({'|'.join(EDITED_FIELDS)})$"


class WorkSessionBase(BaseModel):
    title: str
    description: Optional[str] = None
    rate: Optional[str] = None
    currency: Optional[str] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None


class WorkSessionCreate(WorkSessionBase):
    start: Optional[str] = None
    end: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    is_running: Optional[bool] = None
    edited_field: Optional[str] = Field(default=None, pattern=EDITED_FIELD_PATTERN)


class WorkSessionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    rate: Optional[str] = None
    currency: Optional[str] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    is_running: Optional[bool] = None
    edited_field: Optional[str] = Field(default=None, pattern=EDITED_FIELD_PATTERN)


class WorkSessionOut(WorkSessionBase):
    id: int
    start: str
    end: Optional[str]
    duration: int
    is_running: bool
    time: str
    value: Optional[str] = None
    start_display: Optional[str] = None
    end_display: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class TimerIn(BaseModel):
    start: str
    end: Optional[str] = None
    duration: Optional[int] = Field(default=0, ge=0)


class ReconcileRequest(TimerIn):
    edited_field: str = Field(pattern=EDITED_FIELD_PATTERN)


class ToggleRequest(TimerIn):
    is_running: bool


class TimerOut(BaseModel):
    start: str
    end: Optional[str] = None
    duration: int
    time: Optional[str] = None
    is_running: bool


class CloneRequest(BaseModel):
    ids: list[int] = Field(min_length=1)


class CloneResult(BaseModel):
    source_id: int
    id: int
    url: str


class WorkSessionSummary(BaseModel):
    count: int
    duration: int
    time: str
    value_by_currency: dict[str, Optional[str]] = Field(default_factory=dict)
