"""Environment handling for application settings."""

from worklog.core.config import AppSettings


def test_timezone_reads_tz_or_app_tz(monkeypatch):
    monkeypatch.delenv("APP_TZ", raising=False)
    monkeypatch.setenv("TZ", "Europe/Berlin")
    assert AppSettings().TZ == "Europe/Berlin"

    monkeypatch.setenv("APP_TZ", "Asia/Tokyo")
    assert AppSettings().TZ == "Asia/Tokyo"


def test_database_url_alias(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/other.db")
    assert AppSettings().database_url == "sqlite:///tmp/other.db"
