"""
REST API main application.
Entry point for the FastAPI REST server.

    uvicorn bodegon_api.main:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from bodegon_api.core import configure_cors, make_lifespan
from bodegon_api.routers import ALL_ROUTERS
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.infrastructure.db import Database
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler
from shared.utils.exceptions import AppException


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render domain errors as {"detail", "code"}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request bodies and query strings that fail validation."""
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors()), "code": "validation_error"},
    )


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Use this handle instead of opening one from settings.
    """
    app = FastAPI(
        title="Bodegon REST API",
        description="Menu, taxonomy, contact and backoffice user management",
        version="0.1.0",
        lifespan=make_lifespan(database),
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    configure_cors(app)
    app.add_middleware(CorrelationIdMiddleware)

    for router in ALL_ROUTERS:
        app.include_router(router)

    # Uploaded dish images
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    return app


app = create_app()
