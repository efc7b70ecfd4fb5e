"""
API services

Application-level service container and query orchestration.
"""

from quaycheck.api.services.app_services import AppServices
from quaycheck.api.services.query_service import PortQueryService

__all__ = ["AppServices", "PortQueryService"]
