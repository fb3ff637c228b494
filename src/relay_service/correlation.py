"""Id of the request currently being served, shared by middleware and logging."""
from __future__ import annotations

from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")
