"""
Docker Engine API integration

Read-only inventory client, typed failures and failure classification.
"""

from quaycheck.docker.classifier import ClassifiedError, classify
from quaycheck.docker.client import DockerClient, resolve_docker_host
from quaycheck.docker.exceptions import (
    DockerAPIError,
    DockerAPIVersionError,
    DockerConnectionError,
    DockerException,
    DockerPermissionError,
    DockerTimeoutError,
    ErrorCategory,
)
from quaycheck.docker.models import Container, ContainerState, DockerVersion, PortMapping

__all__ = [
    "ClassifiedError",
    "Container",
    "ContainerState",
    "DockerAPIError",
    "DockerAPIVersionError",
    "DockerClient",
    "DockerConnectionError",
    "DockerException",
    "DockerPermissionError",
    "DockerTimeoutError",
    "DockerVersion",
    "ErrorCategory",
    "PortMapping",
    "classify",
    "resolve_docker_host",
]
