"""HTTP client for fetching CDN resources."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from ..common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from ..constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedResponse:
    """A fully-read HTTP response.

    The body is read eagerly so the response can be stored, shared between
    concurrent resolutions and handed out repeatedly without cloning.
    """

    url: str
    status: int
    body: bytes = b""
    final_url: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def effective_url(self) -> str:
        """URL after redirects, falling back to the requested URL."""
        return self.final_url or self.url

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")

    def json(self) -> Any:
        return json.loads(self.text())


class HttpClient:
    """aiohttp based client used by the fetch cache."""

    def __init__(
        self,
        timeout: int = Constants.REQUEST_TIMEOUT,
        user_agent: str = Constants.USER_AGENT,
        max_redirects: int = Constants.MAX_REDIRECTS,
    ):
        """Initialize the client.

        Args:
            timeout: Total request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            max_redirects: Maximum redirects followed per request.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._user_agent = user_agent
        self._max_redirects = max_redirects
        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None:
            connector = aiohttp.TCPConnector(limit=100)
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                connector=connector,
                headers={"User-Agent": self._user_agent, "Accept": "*/*"},
            )

    async def stop(self) -> None:
        """Stop the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
    ) -> CachedResponse:
        """Issue a request, follow redirects and read the whole body.

        Raises:
            aiohttp.ClientError: On connection failures.
            asyncio.TimeoutError: When the request exceeds the timeout.
        """
        if self._session is None:
            await self.start()
        assert self._session is not None

        safe_target = safe_url(url)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action=method,
                        target=safe_target,
                    ),
                )
            response = await self._session.request(
                method,
                url,
                headers=headers,
                allow_redirects=True,
                max_redirects=self._max_redirects,
            )
            try:
                body = await response.read()
            finally:
                response.release()

        result = CachedResponse(
            url=url,
            status=response.status,
            body=body,
            final_url=str(response.url),
            headers={k: str(v) for k, v in response.headers.items()},
        )
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    outcome="success" if result.ok else "non_2xx",
                    status_code=result.status,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                ),
            )
        return result

    async def __aenter__(self) -> "HttpClient":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.stop()
