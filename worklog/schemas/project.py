"""Pydantic schemas for project payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ProjectBase(BaseModel):
    name: str
    client_id: Optional[int] = None
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    client_id: Optional[int] = None
    description: Optional[str] = None


class ProjectOut(ProjectBase):
    id: int
    client_name: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True
