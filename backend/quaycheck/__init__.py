"""
quaycheck

Read-only view of which host ports Docker containers occupy, and which are free.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from quaycheck.docker.classifier import ClassifiedError, classify
from quaycheck.docker.client import DockerClient
from quaycheck.docker.models import Container, ContainerState, PortMapping
from quaycheck.ports import build_usage_index, check_port, suggest_port

__all__ = [
    "ClassifiedError",
    "Container",
    "ContainerState",
    "DockerClient",
    "PortMapping",
    "build_usage_index",
    "check_port",
    "classify",
    "suggest_port",
]
