"""
Core infrastructure

Configuration, paths and the base exception hierarchy.
"""

from quaycheck.core.config import Settings, get_settings, is_dev_mode
from quaycheck.core.exceptions import (
    ConfigurationError,
    QuaycheckError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "QuaycheckError",
    "Settings",
    "UpstreamError",
    "ValidationError",
    "get_settings",
    "is_dev_mode",
]
