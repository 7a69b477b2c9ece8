"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sims.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from sims.api.middleware.error_handler import setup_exception_handlers
from sims.api.routes import (
    analytics_router,
    distributions_router,
    finished_products_router,
    health_router,
    inventory_router,
    payments_router,
    production_router,
    products_router,
    raw_materials_router,
    recovery_router,
    reports_router,
)
from sims.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Applies pending migrations and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    from sims.infrastructure.storage.sqlite import close_pool, get_pool
    from sims.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        db_path=str(settings.storage.db_path),
    )

    try:
        results = await run_migrations()
        logger.info("database_initialized", migrations_applied=len(results))

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="SIMS API",
        description="Inventory, production costing, distribution and payment recovery",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(inventory_router)
    app.include_router(raw_materials_router)
    app.include_router(finished_products_router)
    app.include_router(production_router)
    app.include_router(distributions_router)
    app.include_router(payments_router)
    app.include_router(recovery_router)
    app.include_router(analytics_router)
    app.include_router(reports_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "sims.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
