"""
Port query service

Orchestrates every query: fetch inventory, build the usage index, answer.
A failed fetch is classified and raised as UpstreamError without retrying.
"""

import logging

from quaycheck.core.exceptions import UpstreamError
from quaycheck.docker.classifier import classify
from quaycheck.docker.client import DockerClient
from quaycheck.docker.models import Container
from quaycheck.ports.availability import (
    PortCheck,
    PortSuggestion,
    check_port,
    parse_port,
    parse_start,
    suggest_port,
)
from quaycheck.ports.index import build_usage_index

logger = logging.getLogger(__name__)


class PortQueryService:
    """
    Stateless port queries over a shared Docker client

    Every call re-fetches the inventory; nothing is cached between calls.
    """

    def __init__(self, docker_client: DockerClient):
        self.docker_client = docker_client

    async def list_containers(self) -> list[Container]:
        """
        List all containers with their port mappings

        Raises:
            UpstreamError: If the inventory fetch fails
        """
        return await self._fetch_inventory()

    async def check(self, raw_port: str | int | None) -> PortCheck:
        """
        Check whether a host port is free

        Args:
            raw_port: Port as received from the caller

        Raises:
            ValidationError: If the port is missing or not an integer
            UpstreamError: If the inventory fetch fails
        """
        port = parse_port(raw_port)
        used = build_usage_index(await self._fetch_inventory())
        result = check_port(port, used)
        logger.debug(f"check port={port} available={result.available}")
        return result

    async def suggest(self, raw_start: str | int | None = None) -> PortSuggestion:
        """
        Suggest the lowest free host port at or above a start hint

        Args:
            raw_start: Optional start hint; defaults to 8000

        Raises:
            UpstreamError: If the inventory fetch fails
        """
        start = parse_start(raw_start)
        used = build_usage_index(await self._fetch_inventory())
        result = suggest_port(start, used)
        if not result.found:
            logger.info(f"No free port found from start={start} ({len(used)} ports in use)")
        return result

    async def _fetch_inventory(self) -> list[Container]:
        try:
            return await self.docker_client.list_containers()
        except Exception as e:
            classified = classify(e)
            logger.warning(
                f"Docker inventory fetch failed ({classified.category.value}/{classified.code}): {e}"
            )
            raise UpstreamError(classified) from e
