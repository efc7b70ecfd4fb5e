"""
Port occupancy derivation and queries
"""

from quaycheck.ports.availability import (
    PortCheck,
    PortSuggestion,
    check_port,
    parse_port,
    parse_start,
    suggest_port,
)
from quaycheck.ports.index import build_usage_index

__all__ = [
    "PortCheck",
    "PortSuggestion",
    "build_usage_index",
    "check_port",
    "parse_port",
    "parse_start",
    "suggest_port",
]
