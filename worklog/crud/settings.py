"""Persistence for per-company settings."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.phases import SETTING_KEYS
from ..models.setting import CompanySetting
from ..services.tenant_settings import TenantSettings, coerce_flag


def load_tenant_settings(db: Session, company_id: int) -> TenantSettings:
    rows = db.execute(
        select(CompanySetting).where(CompanySetting.company_id == company_id)
    ).scalars().all()
    return TenantSettings(company_id, {row.key: row.value for row in rows})


def save_tenant_settings(db: Session, company_id: int, values: dict[str, object]) -> TenantSettings:
    unknown = sorted(set(values) - set(SETTING_KEYS))
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")
    existing = {
        row.key: row
        for row in db.execute(
            select(CompanySetting).where(CompanySetting.company_id == company_id)
        ).scalars()
    }
    for key, raw in values.items():
        stored = "1" if coerce_flag(raw) else "0"
        row = existing.get(key)
        if row is None:
            db.add(CompanySetting(company_id=company_id, key=key, value=stored))
        else:
            row.value = stored
    db.commit()
    return load_tenant_settings(db, company_id)
