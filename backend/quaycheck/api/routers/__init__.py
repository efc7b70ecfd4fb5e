"""
API routers

Modular FastAPI routers for different API domains.
"""

from quaycheck.api.routers.health import router as health_router
from quaycheck.api.routers.ports import router as ports_router

__all__ = ["health_router", "ports_router"]
