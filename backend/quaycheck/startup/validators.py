"""
Startup validators

Checks run by the lifespan handler:
- DOCKER_HOST format (fatal)
- Docker reachability (non-fatal, queries report failures per request)
- Static UI assets (non-fatal)
"""

import logging
from pathlib import Path

from quaycheck.core.config import Settings
from quaycheck.core.exceptions import ConfigurationError
from quaycheck.docker.classifier import classify
from quaycheck.docker.client import DockerClient, resolve_docker_host
from quaycheck.docker.exceptions import DockerException
from quaycheck.startup.exceptions import DockerConfigError

logger = logging.getLogger(__name__)


def validate_configuration(settings: Settings) -> None:
    """
    Validate configuration

    Raises:
        DockerConfigError: If DOCKER_HOST cannot be used
    """
    try:
        base_url, socket_path = resolve_docker_host(settings.docker_host)
    except ConfigurationError as e:
        raise DockerConfigError(e.message, recovery_hint=e.recovery_hint)

    if socket_path:
        logger.info(f"Docker socket: {socket_path}")
    else:
        logger.info(f"Docker endpoint: {base_url}")
    if settings.docker_api_version:
        logger.info(f"Docker API version pinned to {settings.docker_api_version}")


async def check_docker(client: DockerClient) -> str:
    """
    Probe Docker once

    Returns:
        Short description of the daemon (e.g., "Docker 26.1.0 (API 1.45)")

    Raises:
        DockerException: If the probe fails
    """
    version = await client.version()
    return f"Docker {version.version} (API {version.api_version})"


def describe_docker_failure(error: DockerException) -> str:
    """One-line description of a failed probe for health reporting"""
    classified = classify(error)
    return f"{classified.message} ({classified.code})"


def validate_static_dir(static_dir: Path) -> bool:
    """
    Check the browser UI assets

    Returns:
        True if an index.html is present
    """
    return (static_dir / "index.html").is_file()
