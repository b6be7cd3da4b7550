"""
Main entrypoint for the Project Hub API.

This module assembles the FastAPI application, sets up logging, maps
service errors to HTTP responses and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn project_hub_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ForbiddenError, NotFoundError, PersistenceError
from .core.logging_config import setup_logging
from .dependencies import get_event_service
from .services.scheduler import start_sweep, stop_sweep

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


async def persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "The record could not be saved"},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers error handlers, mounts the v1
    routes and hooks database migrations and the realize sweep into
    the application lifecycle.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ForbiddenError, forbidden_handler)
    app.add_exception_handler(PersistenceError, persistence_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()
        app.state.sweep_task = None
        if settings.sweep_enabled:
            app.state.sweep_task = start_sweep(get_event_service(), settings.sweep_interval_seconds)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        task = getattr(app.state, "sweep_task", None)
        if task is not None:
            await stop_sweep(task)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
