"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with routes, exception handlers,
middleware and lifecycle handlers. The application owns its
DatabaseManager: it is built on startup, kept on ``app.state.db`` and
disposed on shutdown.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from minibase.core.config import Settings, get_settings
from minibase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from minibase.domain.exceptions import (
    ConflictError,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from minibase.infrastructure.persistence.database import DatabaseManager, init_database

logger = get_logger(__name__)

# Store error class -> HTTP status
ERROR_STATUS_CODES: dict[type[StoreError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidIdentifierError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: StoreError) -> int:
    """Pick the HTTP status for a store error, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info(
        "Starting Minibase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    db = DatabaseManager(settings)
    try:
        await init_database(db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        await db.disconnect()
        raise
    app.state.db = db

    yield

    logger.info("Shutting down Minibase")
    await db.disconnect()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings; loaded from the environment if omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Minimal Backend-as-a-Service",
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_status(app)
    register_routes(app, settings)
    register_exception_handlers(app, settings)
    register_middleware(app)

    return app


def register_status(app: FastAPI) -> None:
    """Register the status endpoint.

    Always 200; it does not check the database.
    """

    @app.get("/_status", tags=["status"])
    async def service_status():
        return {"status": "ok"}


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes under the configured prefix."""
    from minibase.infrastructure.api.routes import (
        collections_router,
        records_router,
        users_router,
    )

    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])
    app.include_router(
        collections_router,
        prefix=f"{settings.api_prefix}/collections",
        tags=["collections"],
    )
    app.include_router(
        records_router,
        prefix=f"{settings.api_prefix}/collections",
        tags=["records"],
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Register exception handlers producing ``{"error": message}`` bodies."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(
                "Store operation failed",
                path=str(request.url.path),
                method=request.method,
                error=exc.message,
                exc_type=type(exc).__name__,
            )
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": str(exc) if settings.debug else "Internal server error",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register request logging middleware."""

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log each request and propagate a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Application instance used by uvicorn
app = create_app()
