"""Shared HTTP client manager for feed requests.

Keeps one pooled httpx.AsyncClient per client id so repeated renders reuse
connections instead of opening a new client for every fetch. Pooled
connections belong to the event loop that opened them, so a client is only
handed out inside the loop that created it; a new loop gets a new client.
"""

import asyncio
import logging
import weakref
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Global state for shared HTTP clients: client id -> (client, owning loop)
_shared_clients: dict[str, tuple[httpx.AsyncClient, asyncio.AbstractEventLoop]] = {}
_client_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)

DEFAULT_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
)

DEFAULT_TIMEOUT = httpx.Timeout(
    connect=10.0,
    read=20.0,
    write=10.0,
    pool=30.0,
)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "User-Agent": "flite-events/1.1 (+https://flite.city)",
}


def _get_client_lock(loop: asyncio.AbstractEventLoop) -> asyncio.Lock:
    # asyncio.Lock binds to the first loop that waits on it
    lock = _client_locks.get(loop)
    if lock is None:
        lock = _client_locks[loop] = asyncio.Lock()
    return lock


async def get_shared_client(
    client_id: str = "default",
    limits: Optional[httpx.Limits] = None,
    timeout: Optional[httpx.Timeout] = None,
) -> httpx.AsyncClient:
    """Get or create a shared HTTP client with connection pooling.

    Args:
        client_id: Identifier for the client (allows multiple clients if needed)
        limits: Custom connection limits
        timeout: Custom timeout configuration

    Returns:
        Shared httpx.AsyncClient bound to the running event loop

    Raises:
        RuntimeError: If client creation fails
    """
    loop = asyncio.get_running_loop()
    async with _get_client_lock(loop):
        entry = _shared_clients.get(client_id)
        if entry is not None and entry[1] is not loop:
            # Connections of a client from another loop cannot be reused or closed here
            logger.debug("Discarding shared HTTP client '%s' from another event loop", client_id)
            entry = None

        if entry is None or entry[0].is_closed:
            effective_limits = limits or DEFAULT_LIMITS
            effective_timeout = timeout or DEFAULT_TIMEOUT

            logger.debug(
                "Creating shared HTTP client '%s' with limits: max_connections=%s, "
                "max_keepalive=%s",
                client_id,
                effective_limits.max_connections,
                effective_limits.max_keepalive_connections,
            )

            try:
                client = httpx.AsyncClient(
                    limits=effective_limits,
                    timeout=effective_timeout,
                    follow_redirects=True,
                    headers=DEFAULT_HEADERS,
                )
            except Exception as e:
                logger.exception("Failed to create shared HTTP client '%s'", client_id)
                raise RuntimeError(f"Failed to create shared HTTP client: {e}") from e

            entry = _shared_clients[client_id] = (client, loop)
            logger.info("Created shared HTTP client '%s'", client_id)

        return entry[0]


async def close_all_clients() -> None:
    """Close all shared HTTP clients and clean up resources.

    This should be called during application shutdown. Clients created in
    another event loop are dropped without being closed.
    """
    loop = asyncio.get_running_loop()
    async with _get_client_lock(loop):
        for client_id, (client, owner) in _shared_clients.items():
            if owner is not loop:
                logger.debug("Dropping shared HTTP client '%s' from another event loop", client_id)
                continue
            try:
                if not client.is_closed:
                    await client.aclose()
                    logger.debug("Closed shared HTTP client '%s'", client_id)
            except Exception as e:  # noqa: PERF203
                logger.warning("Error closing shared HTTP client '%s': %s", client_id, e)

        _shared_clients.clear()
        logger.debug("All shared HTTP clients closed")
