"""
Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures exception handling, and provides a test-friendly application
factory.

Design Goals
------------
- Centralized router registration
- Global exception safety net
- No state shared between requests
- Test-friendly via create_app()
"""

from __future__ import annotations

import logging
from fastapi import FastAPI

from .config import settings
from .core.errors import (
    QueryParameterError,
    UpstreamError,
    query_parameter_error_handler,
    unhandled_exception_handler,
    upstream_error_handler,
)

from .api import (
    health_routes,
    pairs_routes,
    search_routes,
)


logger = logging.getLogger("rmapi.app")


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------

def configure_logging(level: str) -> None:
    """
    Apply ``level`` to the service's ``rmapi.*`` loggers.

    Runs from create_app(), so it takes effect however the app is served
    (``python -m rm_aggregator`` or ``uvicorn rm_aggregator.main:app``).
    basicConfig is a no-op when the root logger already has handlers.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("rmapi").setLevel(level.upper())


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    configure_logging(settings.log_level)

    app = FastAPI(
        title="rm-aggregator",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # --------------------------------------------------------------
    # Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(QueryParameterError, query_parameter_error_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(search_routes.router)
    app.include_router(pairs_routes.router)

    @app.on_event("startup")
    async def _startup_log() -> None:
        logger.info(
            "Starting rm-aggregator against %s (timeout=%ss, loader_concurrency=%d)",
            settings.upstream_base_url,
            settings.upstream_timeout,
            settings.loader_concurrency,
        )

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
