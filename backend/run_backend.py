#!/usr/bin/env python3
"""
Container entry point for the quaycheck server.

Everything comes from the environment: DOCKER_HOST (usually a read-only
socket proxy such as tcp://socket-proxy:2375), PORT and LOG_LEVEL.
"""

import logging
import sys
import traceback

import uvicorn

from quaycheck.api.app import create_app
from quaycheck.cli import LOG_FORMAT
from quaycheck.core.config import get_settings

logger = logging.getLogger("quaycheck.run_backend")


def log_unhandled(exc_type, exc_value, exc_tb):
    """Route crashes through logging so they reach the container log"""
    logger.critical(f"Unhandled {exc_type.__name__}: {exc_value}")
    for frame in traceback.format_tb(exc_tb):
        logger.critical(frame.rstrip())
    sys.stdout.flush()


def main():
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    sys.excepthook = log_unhandled

    logger.info(f"quaycheck listening on {settings.api_host}:{settings.api_port}, docker={settings.docker_host}")
    try:
        uvicorn.run(
            create_app(),
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Shutdown requested")


if __name__ == "__main__":
    main()
