"""
Custom middleware for the application.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.context import clear_request_context, set_request_context

logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add request context.

    Sets:
    - Request ID (for log correlation)
    - Trace ID (propagated from X-Trace-ID when present)
    - Request timing
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = str(uuid.uuid4())
        trace_id = request.headers.get("X-Trace-ID", request_id)

        request.state.request_id = request_id
        request.state.trace_id = trace_id
        request.state.tenant_id = None
        request.state.user_id = None

        set_request_context(request_id=request_id, trace_id=trace_id)
        start_time = time.perf_counter()

        logger.debug(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Trace-ID"] = trace_id
            response.headers["X-Process-Time"] = str(duration_ms)

            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                user_id=request.state.user_id,
                tenant_id=request.state.tenant_id,
            )

            return response

        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
                error=str(e),
                exc_info=True,
            )
            raise

        finally:
            clear_request_context()
