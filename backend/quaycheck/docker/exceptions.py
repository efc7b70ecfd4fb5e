"""
Docker client exceptions with recovery hints

The client raises exactly one of these for every failed request, so callers
never need to inspect raw transport errors.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Stable failure categories, in classification priority order"""

    API_VERSION_MISMATCH = "api_version_mismatch"
    UNAVAILABLE = "unavailable"
    PERMISSION = "permission"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class DockerException(Exception):
    """Base exception for all Docker Engine API errors"""

    category = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        self.message = message
        self.recovery_hint = recovery_hint
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format exception message with context and recovery hint"""
        parts = [self.message]
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"[{context_str}]")
        if self.recovery_hint:
            parts.append(f"Hint: {self.recovery_hint}")
        return " ".join(parts)


class DockerAPIVersionError(DockerException):
    """Raised when the daemon rejects the requested API version"""

    category = ErrorCategory.API_VERSION_MISMATCH

    def __init__(
        self,
        message: str = "Docker API version mismatch",
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        default_hint = "Unset DOCKER_API_VERSION or pin one the daemon and socket-proxy both support."
        super().__init__(message, recovery_hint or default_hint, context)


class DockerConnectionError(DockerException):
    """Raised when the daemon or socket proxy cannot be reached"""

    category = ErrorCategory.UNAVAILABLE

    def __init__(
        self,
        message: str = "Failed to connect to Docker",
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        default_hint = "Check DOCKER_HOST and that the Docker daemon or socket-proxy is running."
        super().__init__(message, recovery_hint or default_hint, context)


class DockerPermissionError(DockerException):
    """Raised when access to the socket or endpoint is denied"""

    category = ErrorCategory.PERMISSION

    def __init__(
        self,
        message: str = "Permission denied accessing Docker",
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        default_hint = "Check socket permissions, or that the socket-proxy allows CONTAINERS=1."
        super().__init__(message, recovery_hint or default_hint, context)


class DockerTimeoutError(DockerException):
    """Raised when Docker reports or causes a timeout"""

    category = ErrorCategory.TIMEOUT

    def __init__(
        self,
        message: str = "Docker request timed out",
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        default_hint = "The daemon is slow or overloaded. Retry shortly."
        super().__init__(message, recovery_hint or default_hint, context)


class DockerAPIError(DockerException):
    """Raised for any other failed request (unexpected status, malformed body)"""

    def __init__(
        self,
        message: str = "Docker API request failed",
        recovery_hint: str = "",
        context: dict | None = None,
    ):
        default_hint = "Check the Docker daemon logs for details."
        super().__init__(message, recovery_hint or default_hint, context)
