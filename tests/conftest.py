"""Shared fixtures: an in-memory database and an API client bound to it."""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATA_DIR", str(ROOT / "data"))

from worklog.db.session import Base, get_db

# Ensure models are registered so metadata tables are created
from worklog.models import client as client_model  # noqa: F401
from worklog.models import project as project_model  # noqa: F401
from worklog.models import setting as setting_model  # noqa: F401
from worklog.models import status as status_model  # noqa: F401
from worklog.models import task as task_model  # noqa: F401
from worklog.models import task_activity as task_activity_model  # noqa: F401
from worklog.models import work_session as work_session_model  # noqa: F401


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def api_client(engine):
    from fastapi.testclient import TestClient

    from worklog import app

    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_test_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db, None)
