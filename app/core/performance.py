"""
Performance monitoring utilities.
"""

import time
from typing import Any, Callable

import structlog
from fastapi import Request
from starlette.routing import Match

from app.core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

logger = structlog.get_logger(__name__)


class PerformanceMonitor:
    """
    Time an operation and log its outcome.

    Usage:
        async with PerformanceMonitor("list_notes", tenant_id=user.tenant_id):
            ...
    """

    def __init__(self, operation_name: str, slow_threshold_ms: float | None = None, **tags: Any):
        self.operation_name = operation_name
        self.slow_threshold_ms = slow_threshold_ms
        self.tags = tags
        self.start_time: float | None = None
        self.end_time: float | None = None

    async def __aenter__(self) -> "PerformanceMonitor":
        self.start_time = time.perf_counter()
        logger.debug("operation_started", operation=self.operation_name, **self.tags)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        duration_ms = round(self.duration_ms, 2)

        if exc_type is not None:
            logger.warning(
                "operation_failed",
                operation=self.operation_name,
                duration_ms=duration_ms,
                error=str(exc_val),
                **self.tags,
            )
        elif self.slow_threshold_ms is not None and duration_ms > self.slow_threshold_ms:
            logger.warning(
                "slow_operation_detected",
                operation=self.operation_name,
                duration_ms=duration_ms,
                threshold_ms=self.slow_threshold_ms,
                **self.tags,
            )
        else:
            logger.debug(
                "operation_completed",
                operation=self.operation_name,
                duration_ms=duration_ms,
                **self.tags,
            )

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds (0 until the block exits)."""
        if self.start_time is not None and self.end_time is not None:
            return (self.end_time - self.start_time) * 1000
        return 0.0


def _endpoint_label(request: Request) -> str:
    """Route template (e.g. /api/notes/{note_id}) to keep label cardinality bounded."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return "unmatched"


async def track_http_metrics(request: Request, call_next: Callable):
    """
    Middleware to track HTTP metrics.

    Records:
    - Request count by endpoint and status
    - Request duration histogram
    - Requests in progress gauge
    """
    endpoint = _endpoint_label(request)
    method = request.method

    http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
    start_time = time.perf_counter()

    try:
        response = await call_next(request)

        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint,
        ).observe(time.perf_counter() - start_time)

        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()

        return response

    finally:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()
