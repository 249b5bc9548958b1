"""Extension probing for CDN URLs that omit a file extension."""

from __future__ import annotations

import asyncio
import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, List

import aiohttp
from yarl import URL

from ..common.fallback import first_success
from ..common.logging_utils import safe_url
from ..constants import Constants
from ..errors import ContentFetchFailure, FetchError
from .cache import FetchCache

logger = logging.getLogger(__name__)

PROBE_ERRORS = (FetchError, aiohttp.ClientError, asyncio.TimeoutError)


def _ending_variants() -> List[str]:
    variants: List[str] = []
    for suffix in Constants.PATH_SUFFIX_VARIANTS:
        for extension in Constants.EXTENSION_VARIANTS:
            ending = suffix + extension
            if ending not in variants:
                variants.append(ending)
    return variants


ENDING_VARIANTS = tuple(_ending_variants())


@dataclass(frozen=True)
class ProbeResult:
    """The variant that answered."""

    url: str
    content: bytes
    extension: str


def url_extension(url: str) -> str:
    """File extension of a URL's path ('' when there is none)."""
    return posixpath.splitext(URL(url).path)[1]


class ExtensionProber:
    """Tries extension variants of a URL until one can be fetched."""

    def __init__(self, cache: FetchCache):
        self._cache = cache
        self._failed: Dict[str, BaseException] = {}

    @property
    def failed_urls(self) -> Dict[str, BaseException]:
        return dict(self._failed)

    async def probe(self, base_url: str) -> ProbeResult:
        """Fetch the first existing variant of ``base_url``.

        Raises:
            ContentFetchFailure: When no variant exists; ``cause`` is the
                error of the first variant (``base_url`` itself).
        """
        try:
            return await first_success(
                (self._attempt_factory(base_url + ending) for ending in ENDING_VARIANTS),
                errors=PROBE_ERRORS,
            )
        except PROBE_ERRORS as exc:
            logger.debug("No variant of %s could be fetched", safe_url(base_url))
            raise ContentFetchFailure(base_url, exc) from exc

    def _attempt_factory(self, url: str):
        async def attempt() -> ProbeResult:
            return await self._fetch(url)

        return attempt

    async def _fetch(self, url: str) -> ProbeResult:
        known = self._failed.get(url)
        if known is not None:
            raise known
        try:
            response = await self._cache.get(url)
        except PROBE_ERRORS as exc:
            self._failed[url] = exc
            raise
        if not response.ok:
            error = FetchError(response.effective_url, response.status)
            self._failed[url] = error
            raise error
        final_url = response.effective_url
        return ProbeResult(url=final_url, content=response.body, extension=url_extension(final_url))
