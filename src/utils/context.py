from contextvars import ContextVar

# Create a context variable for session_id
session_id: ContextVar[str | None] = ContextVar[str | None]("session_id", default=None)

# Per-request id, set by the request middleware in src/server.py
request_id: ContextVar[str | None] = ContextVar[str | None]("request_id", default=None)
