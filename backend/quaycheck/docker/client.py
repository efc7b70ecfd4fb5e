"""
Async Docker Engine REST API client
"""

import logging
import re
from typing import Any
from urllib.parse import urlparse

import httpx

from quaycheck.core.exceptions import ConfigurationError
from quaycheck.docker.endpoints import DockerEndpoints
from quaycheck.docker.exceptions import (
    DockerAPIError,
    DockerAPIVersionError,
    DockerConnectionError,
    DockerException,
    DockerPermissionError,
    DockerTimeoutError,
)
from quaycheck.docker.models import Container, DockerVersion

logger = logging.getLogger(__name__)

# Host part is ignored by the daemon when talking over a unix socket
UNIX_SOCKET_BASE_URL = "http://docker"

_VERSION_MESSAGE = re.compile(r"\b(client|api) version\b", re.IGNORECASE)


def resolve_docker_host(docker_host: str) -> tuple[str, str | None]:
    """
    Translate a DOCKER_HOST value into an httpx base URL

    Args:
        docker_host: e.g. "unix:///var/run/docker.sock", "tcp://socket-proxy:2375"

    Returns:
        Tuple of (base_url, unix_socket_path or None)

    Raises:
        ConfigurationError: If the scheme is not supported
    """
    parsed = urlparse(docker_host.strip())

    if parsed.scheme == "unix":
        socket_path = parsed.path or parsed.netloc
        if not socket_path:
            raise ConfigurationError(f"DOCKER_HOST has no socket path: {docker_host!r}")
        return UNIX_SOCKET_BASE_URL, socket_path

    if parsed.scheme == "tcp":
        if not parsed.netloc:
            raise ConfigurationError(f"DOCKER_HOST has no address: {docker_host!r}")
        return f"http://{parsed.netloc}", None

    if parsed.scheme in ("http", "https") and parsed.netloc:
        return docker_host.rstrip("/"), None

    raise ConfigurationError(
        f"Unsupported DOCKER_HOST: {docker_host!r}",
        recovery_hint="Use unix:///path/to/docker.sock or tcp://host:port",
    )


class DockerClient:
    """
    Async read-only client for the Docker Engine API

    One instance owns one connection pool and is safe to share between
    concurrent requests.

    Example:
        async with DockerClient("tcp://socket-proxy:2375") as client:
            for container in await client.list_containers():
                print(container.display_name, container.state)
    """

    def __init__(
        self,
        docker_host: str,
        api_version: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize Docker client

        Args:
            docker_host: DOCKER_HOST style address
            api_version: Pin an API version (e.g., "1.43"); None uses the daemon default
            timeout: Request timeout in seconds; None disables client-side timeouts
            transport: Override the transport (used by tests)
        """
        self.docker_host = docker_host
        self.api_version = api_version
        self.timeout = timeout

        base_url, socket_path = resolve_docker_host(docker_host)
        if transport is None and socket_path:
            transport = httpx.AsyncHTTPTransport(uds=socket_path)

        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close HTTP client connection"""
        await self.client.aclose()

    # Read-only endpoints

    async def list_containers(self) -> list[Container]:
        """
        List every container regardless of state

        Returns:
            Containers in the order Docker reported them

        Raises:
            DockerException: One of its subclasses, for any failure
        """
        payload = await self._get_json(DockerEndpoints.CONTAINERS, params={"all": "true"})
        if not isinstance(payload, list):
            raise DockerAPIError(
                "Unexpected container list payload",
                context={"type": type(payload).__name__},
            )

        try:
            containers = [Container.from_api(item) for item in payload]
        except (AttributeError, TypeError, ValueError) as e:
            raise DockerAPIError(f"Malformed container list payload: {e}")

        logger.debug(f"Fetched {len(containers)} containers from {self.docker_host}")
        return containers

    async def version(self) -> DockerVersion:
        """Get daemon version information"""
        payload = await self._get_json(DockerEndpoints.VERSION)
        if not isinstance(payload, dict):
            raise DockerAPIError("Unexpected version payload")
        return DockerVersion.from_api(payload)

    # Internal

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        response = await self._get(path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise DockerAPIError(f"Invalid JSON from Docker: {e}", context={"path": path})

    async def _get(self, path: str, params: dict | None = None) -> httpx.Response:
        url = DockerEndpoints.versioned(path, self.api_version)
        try:
            response = await self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise DockerTimeoutError(f"Docker request timed out: {e}", context={"path": path})
        except httpx.ConnectError as e:
            if "permission denied" in str(e).lower():
                raise DockerPermissionError(
                    f"Permission denied accessing Docker socket: {e}",
                    context={"host": self.docker_host},
                )
            raise DockerConnectionError(
                f"Unable to connect to Docker at {self.docker_host}: {e}",
            )
        except httpx.RequestError as e:
            raise DockerAPIError(f"Docker request failed: {e}", context={"path": path})

        if response.status_code >= 400:
            raise _status_error(response, path)
        return response


def _error_message(response: httpx.Response) -> str:
    """Extract the daemon's error text from a failed response"""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text.strip()


def _status_error(response: httpx.Response, path: str) -> DockerException:
    """Map a non-2xx response to a typed exception"""
    status = response.status_code
    message = _error_message(response) or response.reason_phrase
    context = {"status": status, "path": path}

    if status == 400 and _VERSION_MESSAGE.search(message):
        return DockerAPIVersionError(f"Docker API version mismatch: {message}", context=context)
    if status in (401, 403):
        return DockerPermissionError(f"Docker denied access: {message}", context=context)
    if status in (408, 504):
        return DockerTimeoutError(f"Docker request timed out: {message}", context=context)
    if status in (502, 503):
        return DockerConnectionError(f"Docker is unavailable: {message}", context=context)
    return DockerAPIError(f"Docker returned {status}: {message}", context=context)
