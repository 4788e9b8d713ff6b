"""Application wiring for the Worklog back office.

Configuration, database tables, middleware, error handlers and the API
routers are all assembled here. Importing ``worklog`` gives a ready
``FastAPI`` instance; ``worklog.main`` adds logging and metrics on top.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import http_exception_handler, validation_exception_handler
from .db.session import Base, engine
from .middlewares import RequestIdMiddleware

# Importing the models registers them with ``Base.metadata``.
from .models import client as _client  # noqa: F401
from .models import project as _project  # noqa: F401
from .models import setting as _setting  # noqa: F401
from .models import status as _status  # noqa: F401
from .models import task as _task  # noqa: F401
from .models import task_activity as _task_activity  # noqa: F401
from .models import work_session as _work_session  # noqa: F401

app = FastAPI(title=settings.APP_NAME)

Base.metadata.create_all(bind=engine)

app.add_middleware(RequestIdMiddleware)
if settings.ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# ---------- Routers ----------
from .routers import clients as clients_router  # type: ignore
from .routers import projects as projects_router  # type: ignore
from .routers import settings as settings_router  # type: ignore
from .routers import statuses as statuses_router  # type: ignore
from .routers import tasks as tasks_router  # type: ignore
from .routers import work_sessions as work_sessions_router  # type: ignore

app.include_router(clients_router.router)
app.include_router(projects_router.router)
app.include_router(statuses_router.router)
app.include_router(tasks_router.router)
app.include_router(work_sessions_router.router)
app.include_router(settings_router.router)

# ---------- Exception handling ----------
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}


__all__ = ["app"]
