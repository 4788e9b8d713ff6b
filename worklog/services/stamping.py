"""Status-phase side effects for tasks.

When a task moves to a new status the tenant may want its actual start or
end date filled in automatically. The CRUD layer raises a ``StatusChanged``
event and ``on_status_changing`` applies the policy before the task is
committed. Dates that are already set are never overwritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.phases import (
    FILL_ACTUAL_END_WHEN_CLOSED,
    FILL_ACTUAL_START_WHEN_IN_PROGRESS,
    StatusPhase,
)
from .tenant_settings import TenantSettings

logger = logging.getLogger(__name__)


@dataclass
class StatusChanged:
    task: Any
    old_status: Any | None
    new_status: Any | None


def on_status_changing(event: StatusChanged, settings: TenantSettings, today: date) -> list[str]:
    """Stamp actual dates on ``event.task`` and return the fields touched."""

    status = event.new_status
    if status is None:
        return []

    task = event.task
    stamped: list[str] = []
    phase = getattr(status, "phase", None)

    if phase == StatusPhase.IN_PROGRESS.value and settings.get(FILL_ACTUAL_START_WHEN_IN_PROGRESS):
        if not task.actual_start:
            task.actual_start = today.isoformat()
            stamped.append("actual_start")

    if phase == StatusPhase.CLOSED.value and settings.get(FILL_ACTUAL_END_WHEN_CLOSED):
        if not task.actual_end:
            task.actual_end = today.isoformat()
            stamped.append("actual_end")

    if stamped:
        logger.info(
            "task.stamped",
            extra={"extra_data": {"task_id": getattr(task, "id", None), "phase": phase, "fields": stamped}},
        )
    return stamped
