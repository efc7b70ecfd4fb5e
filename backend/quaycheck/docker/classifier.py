"""
Docker error classification

Turns any failure raised while talking to Docker into a stable
(category, code, message) triple. Typed DockerException subclasses are
classified by type; anything else falls back to matching its text.
"""

import logging
from dataclasses import dataclass

from quaycheck.docker.exceptions import DockerException, ErrorCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedError:
    """
    Stable description of an upstream failure

    Attributes:
        category: ErrorCategory
        code: Machine-readable token (e.g., "docker_unavailable")
        message: Human-readable message
        status_code: HTTP status to report
        recovery_hint: Operator hint
    """

    category: ErrorCategory
    code: str
    message: str
    status_code: int
    recovery_hint: str = ""


@dataclass(frozen=True)
class _CategoryRule:
    code: str
    status_code: int
    message: str
    triggers: tuple[str, ...]


# Checked in order, first match wins
CATEGORY_RULES: dict[ErrorCategory, _CategoryRule] = {
    ErrorCategory.API_VERSION_MISMATCH: _CategoryRule(
        code="docker_api_version",
        status_code=502,
        message="Docker API version mismatch. Check socket-proxy compatibility.",
        triggers=("api version", "client version"),
    ),
    ErrorCategory.UNAVAILABLE: _CategoryRule(
        code="docker_unavailable",
        status_code=503,
        message="Cannot connect to Docker. Is the daemon running?",
        triggers=(
            "connection refused",
            "no such host",
            "name or service not known",
            "no such file or directory",
        ),
    ),
    ErrorCategory.PERMISSION: _CategoryRule(
        code="docker_permission",
        status_code=403,
        message="Permission denied accessing Docker socket.",
        triggers=("permission denied",),
    ),
    ErrorCategory.TIMEOUT: _CategoryRule(
        code="docker_timeout",
        status_code=504,
        message="Docker request timed out.",
        triggers=("timeout", "timed out", "deadline exceeded"),
    ),
}

UNKNOWN_CODE = "docker_error"
UNKNOWN_STATUS = 500


def categorize_text(text: str) -> ErrorCategory:
    """
    Categorize an untyped failure message

    Args:
        text: Raw error text

    Returns:
        First ErrorCategory whose triggers appear in the text, else UNKNOWN
    """
    lowered = text.lower()
    for category, rule in CATEGORY_RULES.items():
        if any(trigger in lowered for trigger in rule.triggers):
            return category
    return ErrorCategory.UNKNOWN


def classify(error: BaseException) -> ClassifiedError:
    """
    Classify a failure raised while talking to Docker

    Never raises. Identical input always gives an identical result.

    Args:
        error: Any exception

    Returns:
        ClassifiedError
    """
    message = getattr(error, "message", None)
    if not isinstance(message, str) or not message:
        message = str(error)
    raw = message or type(error).__name__

    if isinstance(error, DockerException):
        category = error.category
        hint = error.recovery_hint
    else:
        category = categorize_text(raw)
        hint = ""

    rule = CATEGORY_RULES.get(category)
    if rule is None:
        return ClassifiedError(
            category=ErrorCategory.UNKNOWN,
            code=UNKNOWN_CODE,
            message=f"Docker error: {raw}",
            status_code=UNKNOWN_STATUS,
            recovery_hint=hint,
        )

    return ClassifiedError(
        category=category,
        code=rule.code,
        message=rule.message,
        status_code=rule.status_code,
        recovery_hint=hint,
    )
