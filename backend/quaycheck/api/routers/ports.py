"""
Port query API Router

Provides read-only endpoints over the live Docker port occupancy:
- GET /api/containers - containers with their port mappings
- GET /api/check?port=N - is a host port free
- GET /api/suggest?start=N - lowest free host port from N (default 8000)
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from quaycheck.api.cancellation import run_until_disconnected
from quaycheck.api.dependencies import get_query_service
from quaycheck.api.errors import ErrorResponse, api_exception_handler
from quaycheck.api.services import PortQueryService
from quaycheck.docker.models import Container, ContainerState, PortMapping

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["ports"])

UPSTREAM_ERRORS = {
    status: {"model": ErrorResponse} for status in (403, 500, 502, 503, 504)
}


# ============================================================================
# Pydantic Models
# ============================================================================


class PortMappingResponse(BaseModel):
    """One container port; published is false for exposed-only ports"""

    private_port: int
    public_port: int
    type: str
    ip: str | None = None
    published: bool

    @classmethod
    def from_mapping(cls, mapping: PortMapping) -> "PortMappingResponse":
        return cls(
            private_port=mapping.private_port,
            public_port=mapping.public_port,
            type=mapping.protocol,
            ip=mapping.host_ip or None,
            published=mapping.published,
        )


class ContainerResponse(BaseModel):
    """Container with its state and port mappings"""

    id: str
    names: list[str]
    image: str
    state: str
    ports: list[PortMappingResponse]

    @classmethod
    def from_container(cls, container: Container) -> "ContainerResponse":
        state = container.state
        return cls(
            id=container.id,
            names=container.names,
            image=container.image,
            state=state.value if isinstance(state, ContainerState) else state,
            ports=[PortMappingResponse.from_mapping(m) for m in container.ports],
        )


class CheckResponse(BaseModel):
    """Availability of a single host port"""

    port: int
    available: bool
    message: str


class SuggestResponse(BaseModel):
    """Suggested free host port (-1 when none is free)"""

    port: int
    found: bool
    message: str


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/ports",
    response_model=list[ContainerResponse],
    response_model_exclude_none=True,
    include_in_schema=False,
)
@router.get(
    "/containers",
    response_model=list[ContainerResponse],
    response_model_exclude_none=True,
    responses=UPSTREAM_ERRORS,
)
@api_exception_handler("list_containers")
async def list_containers(
    request: Request,
    service: PortQueryService = Depends(get_query_service),
):
    """
    List all containers, in any state, with their port mappings.

    /api/ports is kept as an alias for the browser UI.
    """
    containers = await run_until_disconnected(request, service.list_containers())
    return [ContainerResponse.from_container(c) for c in containers]


@router.get(
    "/check",
    response_model=CheckResponse,
    responses={400: {"model": ErrorResponse}, **UPSTREAM_ERRORS},
)
@api_exception_handler("check_port")
async def check_port(
    request: Request,
    port: str | None = Query(None, description="Host port to check"),
    service: PortQueryService = Depends(get_query_service),
):
    """
    Check whether a host port is free of running containers.

    Returns:
        CheckResponse; 400 if port is missing or not an integer
    """
    result = await run_until_disconnected(request, service.check(port))
    return CheckResponse(port=result.port, available=result.available, message=result.message)


@router.get(
    "/suggest",
    response_model=SuggestResponse,
    responses=UPSTREAM_ERRORS,
)
@api_exception_handler("suggest_port")
async def suggest_port(
    request: Request,
    start: str | None = Query(None, description="Lowest port to consider (default 8000, min 1024)"),
    service: PortQueryService = Depends(get_query_service),
):
    """
    Suggest the lowest free host port at or above start.

    Returns:
        SuggestResponse; port is -1 when every port in range is taken
    """
    result = await run_until_disconnected(request, service.suggest(start))
    return SuggestResponse(port=result.port, found=result.found, message=result.message)
