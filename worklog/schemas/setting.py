"""Pydantic schemas for tenant settings."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class TenantSettingsIn(BaseModel):
    tasks_fill_actual_start_date_when_in_progress: Optional[bool] = None
    tasks_fill_actual_end_date_when_closed: Optional[bool] = None


class TenantSettingsOut(BaseModel):
    company_id: int
    tasks_fill_actual_start_date_when_in_progress: bool = False
    tasks_fill_actual_end_date_when_closed: bool = False
