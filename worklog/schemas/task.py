"""Pydantic schemas for task payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..services.postpone import POSTPONABLE_FIELDS

DATE_FIELD_PATTERN = f"^({'|'.join(POSTPONABLE_FIELDS)})$"


class ChecklistItem(BaseModel):
    label: str
    done: bool = False


class TaskBase(BaseModel):
    title: str
    description: Optional[str] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    status_id: Optional[int] = None
    parent_id: Optional[int] = None
    planned_start: Optional[str] = None
    planned_end: Optional[str] = None
    actual_start: Optional[str] = None
    actual_end: Optional[str] = None
    due_date: Optional[str] = None
    checklist: list[ChecklistItem] = Field(default_factory=list)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    status_id: Optional[int] = None
    parent_id: Optional[int] = None
    planned_start: Optional[str] = None
    planned_end: Optional[str] = None
    actual_start: Optional[str] = None
    actual_end: Optional[str] = None
    due_date: Optional[str] = None
    checklist: Optional[list[ChecklistItem]] = None


class TaskOut(TaskBase):
    id: int
    status_name: Optional[str] = None
    phase: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class PostponeRequest(BaseModel):
    field: str = Field(pattern=DATE_FIELD_PATTERN)
    interval: str = Field(min_length=1, examples=["1 day", "2 weeks", "1 month", "today"])
    from_now: bool = True


class TaskActivityOut(BaseModel):
    id: int
    task_id: int
    event: str
    old_status: Optional[str] = None
    new_status: Optional[str] = None
    created_at: str

    class Config:
        from_attributes = True
