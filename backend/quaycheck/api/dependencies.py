"""
FastAPI dependencies
"""

from fastapi import Depends, Request

from quaycheck.api.services import AppServices, PortQueryService


def get_services(request: Request) -> AppServices:
    """
    Services created by the lifespan handler

    Raises:
        RuntimeError: If the app is serving before startup completed
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Application services not initialized")
    return services


def get_query_service(services: AppServices = Depends(get_services)) -> PortQueryService:
    return services.query_service
