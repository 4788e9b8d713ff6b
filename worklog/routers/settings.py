from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.phases import SETTING_KEYS
from ..crud.settings import save_tenant_settings
from ..db.session import get_db
from ..deps.tenant import get_tenant_settings
from ..schemas.setting import TenantSettingsIn, TenantSettingsOut
from ..services.tenant_settings import TenantSettings

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


def _settings_to_schema(tenant: TenantSettings) -> TenantSettingsOut:
    return TenantSettingsOut(company_id=tenant.company_id, **{key: tenant.get(key) for key in SETTING_KEYS})


@router.get("", response_model=TenantSettingsOut)
def api_get_settings(tenant: TenantSettings = Depends(get_tenant_settings)):
    return _settings_to_schema(tenant)


@router.put("", response_model=TenantSettingsOut)
def api_save_settings(payload: TenantSettingsIn, db: Session = Depends(get_db)):
    values = payload.model_dump(exclude_none=True)
    try:
        tenant = save_tenant_settings(db, settings.COMPANY_ID, values)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _settings_to_schema(tenant)
