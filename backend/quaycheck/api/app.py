"""
FastAPI application - Main API server

Provides the port query endpoints, health checks and the optional browser UI.
"""

import logging

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from quaycheck import __version__
from quaycheck.api.errors import register_exception_handlers
from quaycheck.api.routers import health_router, ports_router
from quaycheck.api.services import AppServices
from quaycheck.core.config import get_settings
from quaycheck.startup.lifecycle import lifespan

logger = logging.getLogger(__name__)


class NoCacheStaticFiles(StaticFiles):
    """StaticFiles subclass that adds no-cache headers to prevent browser caching"""

    async def get_response(self, path: str, scope) -> Response:
        response = await super().get_response(path, scope)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


def create_app(services: AppServices | None = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        services: Pre-built services; when None the lifespan handler creates
            them from settings on startup

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="quaycheck API",
        description="Which host ports are taken by Docker containers, and which are free",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    # Health first, then the API
    app.include_router(health_router)
    app.include_router(ports_router)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Browser UI - MUST be mounted last so it doesn't catch API routes
    static_dir = settings.static_dir
    if static_dir.is_dir():
        app.mount("/", NoCacheStaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.warning(f"Static UI not found at {static_dir} - serving API only")

    return app
