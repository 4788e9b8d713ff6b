from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Worklog"
    APP_ENV: str = "dev"

    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parent.parent.parent / "data")

    # Tenant scope: the company whose settings drive the status stamper and
    # whose timezone anchors every timestamp shown or re-anchored.
    COMPANY_ID: int = 1
    TZ: str = Field(default="America/Chicago", validation_alias=AliasChoices("APP_TZ", "TZ"))
    DATETIME_FORMAT: str = "%Y-%m-%d %H:%M"
    DEFAULT_CURRENCY: str = "USD"

    DB_URL: str = Field(default="", validation_alias="DATABASE_URL")

    HOST: str = "0.0.0.0"
    PORT: int = 8089
    ALLOWED_ORIGINS: list[str] = Field(default_factory=list)

    @property
    def database_url(self) -> str:
        return self.DB_URL or f"sqlite:///{self.DATA_DIR / 'worklog.db'}"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: Any) -> list[str]:
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Iterable):
            return [str(item).strip() for item in value if str(item).strip()]
        raise TypeError("ALLOWED_ORIGINS must be a comma separated string or list")

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return settings


settings = get_settings()
