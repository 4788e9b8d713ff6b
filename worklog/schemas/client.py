"""Pydantic schemas for client payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ClientBase(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    note: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    note: Optional[str] = None


class ClientOut(ClientBase):
    id: int
    label_name: str
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True
