"""
Base exception hierarchy

Provides a consistent exception structure across quaycheck
with clear error messages and recovery hints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quaycheck.docker.classifier import ClassifiedError


class QuaycheckError(Exception):
    """
    Base exception for all quaycheck errors

    Attributes:
        message: Error message
        component: Component that raised the error
        recovery_hint: Optional hint for recovery
    """

    def __init__(self, message: str, component: str = "", recovery_hint: str = ""):
        self.message = message
        self.component = component
        self.recovery_hint = recovery_hint
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.component:
            msg = f"[{self.component}] {msg}"
        if self.recovery_hint:
            msg += f"\nRecovery: {self.recovery_hint}"
        return msg


class ConfigurationError(QuaycheckError):
    """Configuration-related errors"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Configuration",
            recovery_hint=recovery_hint or "Check your .env file and environment variables",
        )


class ValidationError(QuaycheckError):
    """
    Malformed or missing caller input

    Attributes:
        code: Stable machine-readable token (missing_param, invalid_param)
    """

    def __init__(self, message: str, code: str = "invalid_param", recovery_hint: str = ""):
        super().__init__(message, component="Validation", recovery_hint=recovery_hint)
        self.code = code


class UpstreamError(QuaycheckError):
    """Raised when a query fails while talking to Docker"""

    def __init__(self, classified: "ClassifiedError"):
        super().__init__(
            classified.message,
            component="Docker",
            recovery_hint=classified.recovery_hint,
        )
        self.classified = classified
