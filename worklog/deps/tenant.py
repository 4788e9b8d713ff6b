from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.config import settings
from ..crud.settings import load_tenant_settings
from ..db.session import get_db
from ..services.tenant_settings import TenantSettings


def get_tenant_settings(db: Session = Depends(get_db)) -> TenantSettings:
    """Settings of the configured company, handed explicitly to domain code."""

    return load_tenant_settings(db, settings.COMPANY_ID)
