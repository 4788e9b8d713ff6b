from prometheus_fastapi_instrumentator import Instrumentator

from .core.logging import configure_logging
from . import app

configure_logging()
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app)
