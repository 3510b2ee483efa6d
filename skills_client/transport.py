"""HTTP transport capabilities used by the skills clients.

A transport is anything that can send a prepared ``httpx.Request`` and hand
back an ``httpx.Response``. ``httpx.Client`` and ``httpx.AsyncClient`` already
satisfy these protocols, which keeps the clients testable against
``httpx.MockTransport``, ``fastapi.testclient.TestClient`` or ASGI apps.
"""

import logging
from typing import Final, Protocol, runtime_checkable

import httpx

from skills_client.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# Pool limits for the default transports
MAX_CONNECTIONS: Final = 100
MAX_KEEPALIVE_CONNECTIONS: Final = 20


@runtime_checkable
class Transport(Protocol):
    """Synchronous send capability."""

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request, raising an ``httpx`` error if the send fails."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Asynchronous send capability."""

    async def send(self, request: httpx.Request) -> httpx.Response:
        ...


def _limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
    )


def default_transport(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create the transport used when the caller does not supply one.

    Args:
        timeout: Timeout in seconds applied to connect, read, write and pool.

    Returns:
        A new ``httpx.Client``. The caller owns it and must close it.
    """
    logger.debug(f"Creating default HTTP transport with timeout={timeout}s")
    return httpx.Client(limits=_limits(), timeout=httpx.Timeout(timeout))


def default_async_transport(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Async counterpart of :func:`default_transport`."""
    logger.debug(f"Creating default async HTTP transport with timeout={timeout}s")
    return httpx.AsyncClient(limits=_limits(), timeout=httpx.Timeout(timeout))
