"""
Lifecycle management

FastAPI lifespan for quaycheck. The shared Docker client is acquired here,
used by every request, and closed on shutdown.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from quaycheck.api.services import AppServices
from quaycheck.core.config import Settings, get_settings, is_dev_mode
from quaycheck.core.exceptions import ConfigurationError
from quaycheck.docker.exceptions import DockerException
from quaycheck.startup.exceptions import StartupError
from quaycheck.startup.health import HealthStatus, SystemHealth, get_health_state
from quaycheck.startup.validators import (
    check_docker,
    describe_docker_failure,
    validate_configuration,
    validate_static_dir,
)

logger = logging.getLogger(__name__)

BANNER = "=" * 60


def _init_services(app: FastAPI, settings: Settings, health: SystemHealth) -> AppServices:
    """Services injected before startup (tests) are kept as-is"""
    services = getattr(app.state, "services", None)
    if services is None:
        try:
            services = AppServices.create(settings)
        except ConfigurationError as e:
            health.record("services", HealthStatus.UNHEALTHY, e.message)
            raise StartupError(e.message, component="Services", recovery_hint=e.recovery_hint) from e
        app.state.services = services
    health.record("services", HealthStatus.HEALTHY, f"Docker client for {services.docker_client.docker_host}")
    return services


async def _probe_docker(services: AppServices, health: SystemHealth) -> None:
    try:
        description = await check_docker(services.docker_client)
    except DockerException as e:
        # Queries report their own failures, so an unreachable daemon only degrades startup
        warning = describe_docker_failure(e)
        logger.warning(f"[WARN]  Docker not reachable at startup: {warning}")
        health.record("docker", HealthStatus.DEGRADED, warning)
        return
    logger.info(f"[OK] {description}")
    health.record("docker", HealthStatus.HEALTHY, description)


def _check_static(settings: Settings, health: SystemHealth) -> None:
    if is_dev_mode():
        logger.info("Static UI check skipped (dev mode)")
        health.record("static", HealthStatus.HEALTHY, "Dev mode - UI served separately")
    elif validate_static_dir(settings.static_dir):
        health.record("static", HealthStatus.HEALTHY, f"Serving {settings.static_dir}")
    else:
        health.record("static", HealthStatus.DEGRADED, f"No index.html in {settings.static_dir}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup phases, in order:
    1. Configuration (fatal)
    2. Application services (fatal)
    3. Docker probe (degrades only)
    4. Static UI (degrades only)
    """
    health = get_health_state()
    settings = get_settings()
    started = time.monotonic()

    logger.info(BANNER)
    logger.info("quaycheck - Startup")
    logger.info(BANNER)

    try:
        logger.info("Phase 1/4: Configuration")
        try:
            validate_configuration(settings)
        except StartupError as e:
            health.record("configuration", HealthStatus.UNHEALTHY, e.message)
            raise
        health.record("configuration", HealthStatus.HEALTHY, "Configuration valid")

        logger.info("Phase 2/4: Application services")
        services = _init_services(app, settings, health)

        logger.info("Phase 3/4: Docker connectivity")
        await _probe_docker(services, health)

        logger.info("Phase 4/4: Static UI")
        _check_static(settings, health)

        health.mark_ready()
        logger.info(BANNER)
        logger.info(f"[OK] Ready in {time.monotonic() - started:.2f}s - status {health.overall.value.upper()}")
        for warning in health.warnings:
            logger.warning(f"     - {warning}")
        logger.info(BANNER)

        yield

    except StartupError as e:
        logger.error(f"[ERROR] Startup failed: {e}")
        health.overall = HealthStatus.UNHEALTHY
        raise

    finally:
        health.ready = False
        services = getattr(app.state, "services", None)
        if services is not None:
            await services.cleanup()
        logger.info("[STOP] Shutdown complete")
