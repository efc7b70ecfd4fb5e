"""
Startup-specific exceptions

Provides clear error messages with recovery instructions for startup failures.
"""

from quaycheck.core.exceptions import QuaycheckError


class StartupError(QuaycheckError):
    """Base exception for startup failures"""

    def __init__(self, message: str, component: str, recovery_hint: str = ""):
        super().__init__(message, component=component, recovery_hint=recovery_hint)


class DockerConfigError(StartupError):
    """Docker connection settings are unusable"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Docker",
            recovery_hint=recovery_hint or "Set DOCKER_HOST to unix:///var/run/docker.sock or tcp://host:port",
        )
