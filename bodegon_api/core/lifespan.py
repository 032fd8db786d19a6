"""
Application lifespan handler.
Opens the database handle on startup and disposes of it on shutdown.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI

from bodegon_api.models import Base
from shared.config.logging import rest_api_logger as logger
from shared.config.logging import setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import Database


def check_production_secrets() -> None:
    """Abort startup in production when secrets are weak; warn otherwise."""
    secret_errors = settings.validate_production_secrets()
    if not secret_errors:
        return
    for error in secret_errors:
        logger.error("Configuration error: %s", error)
    if settings.environment == "production":
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(secret_errors)}. "
            "Server will not start with insecure configuration."
        )
    logger.warning("Running with insecure defaults (acceptable for development only)")


def make_lifespan(database: Database | None = None) -> Callable[[FastAPI], AsyncIterator[None]]:
    """
    Build the lifespan for an app.

    Args:
        database: Pre-built handle (tests). When omitted, one is opened from
            settings and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        check_production_secrets()

        logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

        owns_database = database is None
        db_handle = database or Database(settings.database_url, echo=settings.database_echo)
        app.state.database = db_handle

        Base.metadata.create_all(bind=db_handle.engine)
        logger.info("Database tables created/verified")

        yield

        logger.info("Shutting down REST API")
        if owns_database:
            db_handle.close()

    return lifespan
