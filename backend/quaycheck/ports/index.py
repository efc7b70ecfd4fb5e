"""
Port usage index

Derives the set of host ports occupied by running containers.
"""

from collections.abc import Iterable

from quaycheck.docker.models import Container


def build_usage_index(containers: Iterable[Container]) -> set[int]:
    """
    Collect host ports bound by running containers

    Only containers in the running state contribute, and only their
    published mappings (public port != 0). Exposed-only ports never
    conflict with host binding.

    Args:
        containers: Inventory snapshot

    Returns:
        Set of occupied host ports
    """
    return {
        mapping.public_port
        for container in containers
        if container.is_running
        for mapping in container.ports
        if mapping.published
    }
