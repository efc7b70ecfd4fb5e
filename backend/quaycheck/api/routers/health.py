"""
Health check endpoints

- GET /health - startup summary (503 when unhealthy)
- GET /health/live - process is up
- GET /health/ready - startup finished and nothing fatal was found
- GET /health/detailed - per-component startup results
- GET /health/docker - live probe of the Docker API
"""

from typing import Any

from fastapi import APIRouter, Depends, Response

from quaycheck import __version__
from quaycheck.api.dependencies import get_services
from quaycheck.api.errors import classified_response
from quaycheck.api.services import AppServices
from quaycheck.docker.classifier import classify
from quaycheck.docker.exceptions import DockerException
from quaycheck.startup.health import HealthStatus, get_health_state

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(response: Response) -> dict[str, Any]:
    """
    Summary of what startup found

    A degraded service (e.g. Docker unreachable at boot) still answers 200,
    because each query reports its own upstream failure.
    """
    health = get_health_state()
    if health.overall == HealthStatus.UNHEALTHY:
        response.status_code = 503

    return {
        "status": health.overall.value,
        "ready": health.ready,
        "version": __version__,
        "errors": health.errors or None,
        "warnings": health.warnings or None,
    }


@router.get("/live")
async def liveness_probe() -> dict[str, str]:
    return {"status": "alive"}


@router.get("/ready")
async def readiness_probe(response: Response) -> dict[str, Any]:
    health = get_health_state()
    if not health.serving:
        response.status_code = 503
    return {"ready": health.ready, "status": health.overall.value}


@router.get("/detailed")
async def detailed_health(response: Response) -> dict[str, Any]:
    health = get_health_state()
    if health.overall == HealthStatus.UNHEALTHY:
        response.status_code = 503
    return health.to_dict()


@router.get("/docker")
async def docker_health(services: AppServices = Depends(get_services)):
    """
    Ask the daemon for its version right now

    Returns:
        200 with version info, or the same classified error body the port
        endpoints use
    """
    client = services.docker_client
    try:
        version = await client.version()
    except DockerException as e:
        return classified_response(classify(e))

    return {
        "status": "reachable",
        "docker_host": client.docker_host,
        "version": version.version,
        "api_version": version.api_version,
        "min_api_version": version.min_api_version,
        "os": version.os,
        "arch": version.arch,
    }
