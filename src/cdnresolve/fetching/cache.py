"""Two-tier fetch cache with a stale-while-revalidate policy.

The first tier is a platform-provided :class:`ResponseStore` when the caller
has one; otherwise responses live in a :class:`MemoryResponseStore`.

Policy for GET requests:

* hit + ``permanent`` -> cached response, no network traffic
* hit + not permanent -> cached response now, background refresh for later
* miss -> network, store, return

In-flight requests are not de-duplicated: two concurrent misses for the
same URL both go to the network and the last write wins.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol, Set

import aiohttp
from yarl import URL

from ..common.logging_utils import extra_context, is_debug_enabled, safe_url
from .client import CachedResponse

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into a :class:`CachedResponse`."""

    async def fetch(self, url: str, method: str = "GET") -> CachedResponse:
        ...


class ResponseStore(Protocol):
    """Storage tier for cached responses."""

    async def match(self, key: str) -> Optional[CachedResponse]:
        ...

    async def put(self, key: str, response: CachedResponse) -> None:
        ...


class MemoryResponseStore:
    """In-memory response store keyed by normalized request URL."""

    def __init__(self) -> None:
        self._entries: Dict[str, CachedResponse] = {}

    async def match(self, key: str) -> Optional[CachedResponse]:
        return self._entries.get(key)

    async def put(self, key: str, response: CachedResponse) -> None:
        self._entries[key] = response

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def request_key(url: str, method: str = "GET") -> str:
    """Generate the cache key for a request."""
    normalized = str(URL(url))
    method = method.upper()
    return normalized if method == "GET" else f"{method} {normalized}"


class FetchCache:
    """HTTP response cache shared by every resolution in a session."""

    def __init__(self, client: Fetcher, store: Optional[ResponseStore] = None):
        """Initialize the fetch cache.

        Args:
            client: Network fetcher used on misses and refreshes.
            store: Platform cache store; an in-memory store is used when None.
        """
        self._client = client
        self._store: ResponseStore = store if store is not None else MemoryResponseStore()
        self._pending: Set["asyncio.Task[None]"] = set()
        self._hits = 0
        self._misses = 0
        self._refreshes = 0

    async def get(self, url: str, permanent: bool = False, method: str = "GET") -> CachedResponse:
        """Fetch ``url`` through the cache.

        Args:
            url: Request URL.
            permanent: Trust a cached copy without revalidating it.
            method: HTTP method; only GET responses are cached.
        """
        if method.upper() != "GET":
            return await self._client.fetch(url, method=method)

        key = request_key(url)
        cached = await self._store.match(key)
        if cached is None:
            self._misses += 1
            response = await self._client.fetch(url)
            await self._remember(key, response)
            return response

        self._hits += 1
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP cache hit",
                extra=extra_context(
                    event="cache_hit",
                    component="fetch_cache",
                    action="GET",
                    target=safe_url(url),
                    permanent=permanent,
                ),
            )
        if not permanent:
            self._schedule_refresh(key, url)
        return cached

    async def _remember(self, key: str, response: CachedResponse) -> None:
        if response.status >= 500:  # Don't cache server errors
            return
        await self._store.put(key, response)

    def _schedule_refresh(self, key: str, url: str) -> None:
        task = asyncio.ensure_future(self._refresh(key, url))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refresh(self, key: str, url: str) -> None:
        try:
            response = await self._client.fetch(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Background refresh of %s failed: %s", safe_url(url), exc)
            return
        self._refreshes += 1
        await self._remember(key, response)

    async def drain(self) -> None:
        """Wait for every pending background refresh to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "refreshes": self._refreshes,
            "pending_refreshes": len(self._pending),
        }
