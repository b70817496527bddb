"""
Error tracking and reporting.

Forwards unexpected exceptions to Sentry when configured, and always
records them in the structured log.
"""

from typing import Any

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import settings

logger = structlog.get_logger(__name__)


class ErrorTracker:
    """Error tracking interface."""

    def __init__(self) -> None:
        self.enabled = False

    def init(self) -> None:
        """Initialize Sentry if it is enabled and has a DSN."""
        if not (settings.sentry_enabled and settings.sentry_dsn):
            logger.info("error_tracking_local_only")
            return

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            release=settings.app_version,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(),
                SqlalchemyIntegration(),
            ],
        )
        self.enabled = True
        logger.info("sentry_initialized")

    def capture_exception(
        self,
        exception: Exception,
        context: dict[str, Any] | None = None,
    ) -> str | None:
        """
        Capture and report an exception.

        Args:
            exception: The exception to report
            context: Additional context (request id, path, ...)

        Returns:
            Event ID from Sentry (or None when running locally)
        """
        logger.error(
            "exception_captured",
            exception=str(exception),
            exception_type=type(exception).__name__,
            context=context,
        )

        if not self.enabled:
            return None

        with sentry_sdk.new_scope() as scope:
            if context:
                scope.set_context("request", context)
            return sentry_sdk.capture_exception(exception)


error_tracker = ErrorTracker()
