"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.database import db_manager
from app.core.error_tracking import error_tracker
from app.core.exceptions import NotesAppException
from app.core.logging_config import get_logger, setup_logging
from app.core.metrics import app_info
from app.core.middleware import RequestContextMiddleware
from app.core.performance import track_http_metrics

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    db_manager.init()
    if settings.db_create_tables:
        await db_manager.create_tables()
    error_tracker.init()

    app_info.info({
        "version": settings.app_version,
        "environment": settings.environment,
    })

    logger.info("application_ready")

    yield

    logger.info("application_shutting_down")
    await db_manager.close()
    logger.info("application_shutdown_complete")


def create_application() -> FastAPI:
    """Application factory."""

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Multi-tenant notes with plan-based quotas",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Middleware (order matters - last added = outermost)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.metrics_enabled:
        @app.middleware("http")
        async def performance_middleware(request: Request, call_next):
            return await track_http_metrics(request, call_next)

    # Exception handlers
    @app.exception_handler(NotesAppException)
    async def app_exception_handler(
        request: Request,
        exc: NotesAppException,
    ) -> JSONResponse:
        logger.info(
            "request_rejected",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            detail=exc.message,
        )
        content: dict = {"detail": exc.message}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            "validation_error",
            path=request.url.path,
            errors=errors,
        )

        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": f"{field}: {message}" if field else message,
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Global exception handler with error tracking."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )

        error_tracker.capture_exception(
            exc,
            context={
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
            }
        )

        if settings.is_production:
            detail = "Something went wrong. Please try again later."
        else:
            detail = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": detail,
                "request_id": request_id,
            },
        )

    # Register routers
    from app.api.health_router import router as health_router
    from app.api.metrics_router import router as metrics_router
    from app.api.router import api_router

    app.include_router(health_router)

    if settings.metrics_enabled:
        app.include_router(metrics_router)

    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "docs": "/docs" if settings.is_development else "Disabled in production",
            "health": "/health",
        }

    logger.info("application_configured")
    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload and settings.is_development,
        log_level=settings.log_level.lower(),
        access_log=False,  # Request logging is done by RequestContextMiddleware
    )
