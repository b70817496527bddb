"""
Request-scoped context.

One immutable RequestContext per request, held in a contextvar so log
processors can read it. The middleware sets it when a request starts and
clears it when the request ends; the auth gate adds user and tenant ids.
"""

import contextvars
from dataclasses import asdict, dataclass, replace
from typing import Any


@dataclass(frozen=True)
class RequestContext:
    request_id: str | None = None
    trace_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None


_EMPTY = RequestContext()

_request_context: contextvars.ContextVar[RequestContext] = contextvars.ContextVar(
    "request_context", default=_EMPTY
)


def set_request_context(**fields: str | None) -> RequestContext:
    """Overlay non-empty fields on the current context."""
    updates = {key: value for key, value in fields.items() if value}
    ctx = replace(_request_context.get(), **updates)
    _request_context.set(ctx)
    return ctx


def get_request_context() -> dict[str, Any]:
    """Populated context fields as a dictionary (for log events)."""
    return {key: value for key, value in asdict(_request_context.get()).items() if value}


def clear_request_context() -> None:
    _request_context.set(_EMPTY)
