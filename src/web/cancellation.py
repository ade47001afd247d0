"""Request-scoped cancellation: stop server-side work when the client goes away."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import structlog
from fastapi import Request

logger = structlog.get_logger()

T = TypeVar("T")

# nginx convention for "client closed request"
CLIENT_CLOSED_REQUEST = 499
POLL_INTERVAL = 0.25


class ClientDisconnected(Exception):
    """The HTTP client disconnected before the response was ready."""


async def run_until_disconnect(
    request: Request, work: Awaitable[T], poll_interval: float = POLL_INTERVAL
) -> T:
    """Await `work`, cancelling it if the client disconnects first."""
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("web.client_disconnected", path=request.url.path)
                raise ClientDisconnected(request.url.path)
    finally:
        if not task.done():
            task.cancel()
