"""
Application Services Container

Holds the long-lived resources shared by all requests. Created once in the
lifespan handler and stored on app.state.services.
"""

import logging
from dataclasses import dataclass

from quaycheck.api.services.query_service import PortQueryService
from quaycheck.core.config import Settings
from quaycheck.docker.client import DockerClient

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """
    Container for all application-level services

    Provides centralized access to:
    - DockerClient (the single connection pool to Docker)
    - PortQueryService (port queries over that client)
    """

    docker_client: DockerClient
    query_service: PortQueryService

    @classmethod
    def create(cls, settings: Settings) -> "AppServices":
        """
        Create new AppServices instance from settings

        Args:
            settings: Application settings

        Returns:
            Initialized AppServices instance

        Raises:
            ConfigurationError: If DOCKER_HOST is invalid
        """
        docker_client = DockerClient(
            settings.docker_host,
            api_version=settings.docker_api_version,
            timeout=settings.docker_timeout,
        )
        logger.info(f"Docker client configured for {settings.docker_host}")
        return cls.from_client(docker_client)

    @classmethod
    def from_client(cls, docker_client: DockerClient) -> "AppServices":
        """Wrap an existing client (e.g., one with a test transport)"""
        return cls(
            docker_client=docker_client,
            query_service=PortQueryService(docker_client),
        )

    async def cleanup(self) -> None:
        """Release the Docker connection pool"""
        await self.docker_client.close()
        logger.info("Docker client closed")
