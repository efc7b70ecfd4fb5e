"""
Request-scoped cancellation

Binds an in-flight query to its HTTP request so that a client disconnect
cancels the Docker fetch instead of leaking it.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from starlette.requests import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientDisconnected(Exception):
    """Raised when the caller went away before the query finished"""


async def run_until_disconnected(
    request: Request,
    awaitable: Awaitable[T],
    poll_interval: float = 0.1,
) -> T:
    """
    Await a query while watching the request for a disconnect

    Args:
        request: The triggering request
        awaitable: Query coroutine
        poll_interval: How often to check the connection (seconds)

    Returns:
        The query result

    Raises:
        ClientDisconnected: If the client disconnected first (the query is cancelled)
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.debug(f"Client disconnected from {request.url.path}, cancelling query")
                task.cancel()
                break
    except asyncio.CancelledError:
        task.cancel()
        raise

    try:
        await task
    except asyncio.CancelledError:
        pass
    raise ClientDisconnected()
