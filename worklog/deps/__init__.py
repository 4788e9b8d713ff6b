# Request-scoped FastAPI dependencies, e.g.
# `from worklog.deps.tenant import get_tenant_settings`.
