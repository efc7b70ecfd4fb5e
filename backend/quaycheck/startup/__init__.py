"""
Startup and shutdown orchestration with health tracking
"""

from quaycheck.startup.health import HealthStatus, get_health_state, reset_health_state
from quaycheck.startup.lifecycle import lifespan

__all__ = ["HealthStatus", "get_health_state", "lifespan", "reset_health_state"]
