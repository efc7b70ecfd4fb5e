"""
Port availability queries

check_port answers whether a single port is free; suggest_port finds the
lowest free port at or above a start hint.
"""

import re
from collections.abc import Container as Membership
from dataclasses import dataclass

from quaycheck.core.exceptions import ValidationError

DEFAULT_SUGGEST_START = 8000
MIN_SUGGEST_PORT = 1024
MAX_PORT = 65535
NOT_FOUND = -1

# ASCII digits only: no "1_000", no full-width or other Unicode digits
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PortCheck:
    """Result of a single-port availability check"""

    port: int
    available: bool
    message: str


@dataclass(frozen=True)
class PortSuggestion:
    """Result of a free-port search"""

    port: int
    found: bool
    message: str


def _parse_int(raw: str | int | None) -> int | None:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        return int(raw.strip())
    return None


def parse_port(raw: str | int | None) -> int:
    """
    Parse the port argument of a check

    Any integer is accepted, including negative values and values above
    65535, which simply never appear in the usage index.

    Raises:
        ValidationError: If the value is absent or not an integer
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Missing port parameter", code="missing_param")
    port = _parse_int(raw)
    if port is None:
        raise ValidationError("Invalid port parameter", code="invalid_param")
    return port


def parse_start(raw: str | int | None) -> int:
    """Parse a suggest start hint, falling back to the default when absent or unparsable"""
    start = _parse_int(raw)
    return DEFAULT_SUGGEST_START if start is None else start


def check_port(port: int, used: Membership[int]) -> PortCheck:
    """
    Check whether a port is free

    Args:
        port: Port to check
        used: Usage index

    Returns:
        PortCheck
    """
    available = port not in used
    message = "Port is available" if available else "Port is currently in use by a Docker container"
    return PortCheck(port=port, available=available, message=message)


def suggest_port(start: int, used: Membership[int]) -> PortSuggestion:
    """
    Find the lowest free port in [max(start, 1024), 65535]

    Args:
        start: Start hint; values below 1024 are raised to 1024
        used: Usage index

    Returns:
        PortSuggestion with port=-1 and found=False when the range is exhausted
    """
    start = max(start, MIN_SUGGEST_PORT)

    for port in range(start, MAX_PORT + 1):
        if port not in used:
            return PortSuggestion(port=port, found=True, message=f"Suggested port: {port}")

    return PortSuggestion(port=NOT_FOUND, found=False, message="No free ports found in range")
