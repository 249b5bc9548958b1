"""CDN resolver session.

A :class:`CdnResolver` owns every cache for one build: the fetch cache, the
virtual content store, version pins and the failed-URL sets. It resolves
import specifiers to virtual paths and serves their content back.
"""

from __future__ import annotations

import dataclasses
import logging
import posixpath
from dataclasses import dataclass
from typing import Any, Optional

from yarl import URL

from .common.logging_utils import extra_context, is_debug_enabled, safe_url
from .common.url_utils import encode_whitespace, normalize_path, url_join
from .config import ResolverConfig
from .constants import CdnStyle, Constants, Loader, SpecifierKind
from .errors import UnresolvableSpecifier
from .fetching.cache import FetchCache, Fetcher, ResponseStore
from .fetching.client import HttpClient
from .fetching.prober import ExtensionProber
from .loaders import content_type_hint
from .packages.exports import modern_resolve
from .packages.manifest import PackageManifest
from .packages.metadata import PackageMetadataResolver
from .packages.versions import VersionPins, is_npm_range
from .specifiers.classifier import classify, is_virtual_path
from .specifiers.models import CdnTarget
from .specifiers.origin import resolve_origin
from .specifiers.parser import parse_package_specifier
from .store import IndexEntry, VirtualContentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Who is importing.

    Attributes:
        importer_path: Virtual path of the importing module ("" for entries).
        ancestor_manifest: Manifest of the package the importer belongs to.
    """

    importer_path: str = ""
    ancestor_manifest: Optional[PackageManifest] = None

    @property
    def resolve_dir(self) -> str:
        return posixpath.dirname(self.importer_path) if self.importer_path else ""


@dataclass(frozen=True)
class ResolvedPath:
    """Where a specifier ended up."""

    virtual_path: str
    url: Optional[str] = None
    manifest: Optional[PackageManifest] = None
    namespace: str = Constants.NAMESPACE
    side_effects: Any = None


@dataclass(frozen=True)
class LoadResult:
    """Content served for a virtual path."""

    content: str
    content_type_hint: Loader
    resolve_dir: str
    raw: bytes = b""


class CdnResolver:
    """Resolves import specifiers against public CDNs.

    Example:
        async with CdnResolver() as resolver:
            resolved = await resolver.resolve("react")
            loaded = resolver.load(resolved.virtual_path)
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        client: Optional[Fetcher] = None,
        store: Optional[VirtualContentStore] = None,
        response_store: Optional[ResponseStore] = None,
    ):
        """Initialize the session.

        Args:
            config: Resolver configuration; defaults are used when None.
            client: Network fetcher; an aiohttp client is created when None.
            store: Virtual content store to fill.
            response_store: Platform response cache for the fetch cache.
        """
        self._config = config if config is not None else ResolverConfig()
        self._http: Optional[HttpClient] = None
        if client is None:
            self._http = HttpClient(
                timeout=self._config.request_timeout,
                user_agent=self._config.user_agent,
                max_redirects=self._config.max_redirects,
            )
        self._client: Fetcher = client if client is not None else self._http
        self._cache = FetchCache(self._client, response_store)
        self._store = store if store is not None else VirtualContentStore(self._config.virtual_root)
        self._pins = VersionPins()
        self._prober = ExtensionProber(self._cache)
        self._metadata = PackageMetadataResolver(self._cache, self._store, self._pins)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def store(self) -> VirtualContentStore:
        return self._store

    @property
    def cache(self) -> FetchCache:
        return self._cache

    @property
    def pins(self) -> VersionPins:
        return self._pins

    async def resolve(
        self,
        specifier: str,
        context: Optional[ResolutionContext] = None,
    ) -> Optional[ResolvedPath]:
        """Resolve ``specifier`` to a virtual path, fetching what it needs.

        Args:
            specifier: The import specifier as written in source.
            context: The importing module; defaults to an entry point.

        Returns:
            ResolvedPath, or None when the specifier is a path outside the
            virtual root (left to the bundler).

        Raises:
            MalformedSpecifier: If a bare specifier has no package name.
            UnresolvableSpecifier: If no content could be found.
        """
        context = context if context is not None else ResolutionContext()
        if specifier.startswith("#"):
            return await self._resolve_subpath_import(specifier, context)
        if classify(specifier) is SpecifierKind.BARE:
            return await self._resolve_bare(specifier, context)
        return await self._resolve_path(specifier, context)

    def load(self, virtual_path: str) -> Optional[LoadResult]:
        """Serve the stored content of ``virtual_path``, or None if unknown."""
        entry = self._store.entry(virtual_path)
        if entry is None:
            return None
        return LoadResult(
            content=entry.text,
            content_type_hint=content_type_hint(virtual_path),
            resolve_dir=posixpath.dirname(virtual_path),
            raw=entry.content,
        )

    async def _resolve_bare(self, specifier: str, context: ResolutionContext) -> ResolvedPath:
        target = resolve_origin(specifier, self._config.default_cdn)
        if target.is_literal_url or target.style in (CdnStyle.GITHUB, CdnStyle.DENO):
            return await self._resolve_literal(target)

        parsed = parse_package_specifier(target.path)
        key = url_join(target.origin, parsed.to_path())
        known = self._store.lookup_entry(key)
        if known is not None:
            return self._from_index(known)

        requested = parsed.version if parsed.has_explicit_version else self._ancestor_range(parsed.name, context)
        parsed = dataclasses.replace(parsed, version=self._pins.choose(parsed.name, requested))

        entry = await self._metadata.resolve_package_entry(parsed, target, context)
        url = url_join(target.origin, f"{entry.name}@{entry.version}", entry.subpath)
        side_effects = entry.manifest.side_effects if entry.manifest is not None else None
        return await self._fetch_into_store(url, key, manifest=entry.manifest, side_effects=side_effects)

    async def _resolve_literal(self, target: CdnTarget) -> ResolvedPath:
        """GitHub, Deno and unknown-host URLs are fetched as written."""
        known = self._store.lookup_entry(target.url)
        if known is not None:
            return self._from_index(known)
        return await self._fetch_into_store(target.url, target.url)

    async def _resolve_subpath_import(self, specifier: str, context: ResolutionContext) -> ResolvedPath:
        ancestor = context.ancestor_manifest
        if ancestor is None or ancestor.package_root_url is None:
            raise UnresolvableSpecifier(f"No package manifest to resolve {specifier} against")

        mapped = modern_resolve(ancestor.raw, specifier, field="imports")
        if not mapped:
            raise UnresolvableSpecifier(f"{specifier} is not listed in the imports of {ancestor.name or ancestor.url}")
        if classify(mapped) is SpecifierKind.BARE and not mapped.startswith("#"):
            return await self._resolve_bare(mapped, context)

        url = url_join(ancestor.package_root_url, mapped)
        known = self._store.lookup_entry(url)
        if known is not None:
            return self._from_index(known)
        return await self._fetch_into_store(url, url, manifest=ancestor)

    async def _resolve_path(self, specifier: str, context: ResolutionContext) -> Optional[ResolvedPath]:
        kind = classify(specifier)
        if kind is SpecifierKind.RELATIVE:
            path = normalize_path(posixpath.join(context.resolve_dir or "/", specifier))
        else:
            path = normalize_path(specifier.replace("\\", "/"))

        if not is_virtual_path(path, self._store.root):
            logger.debug("Leaving %s to the bundler", path)
            return None

        known = self._store.lookup_entry(path)
        if known is not None:
            return self._from_index(known)

        importer_url = self._store.source_url(context.importer_path) if context.importer_path else None
        if importer_url and kind is SpecifierKind.RELATIVE:
            url = str(URL(importer_url).join(URL(encode_whitespace(specifier))))
        else:
            url = url_join(self._config.default_cdn, path[len(self._store.root):])
        return await self._fetch_into_store(url, path, manifest=context.ancestor_manifest)

    async def _fetch_into_store(
        self,
        url: str,
        key: str,
        manifest: Optional[PackageManifest] = None,
        side_effects: Any = None,
    ) -> ResolvedPath:
        result = await self._prober.probe(url)
        virtual_path = self._store.put_url(result.url, result.content)
        self._store.remember(key, virtual_path, manifest=manifest, side_effects=side_effects)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved specifier",
                extra=extra_context(
                    event="resolved",
                    component="resolver",
                    target=safe_url(result.url),
                    virtual_path=virtual_path,
                ),
            )
        return ResolvedPath(
            virtual_path=virtual_path,
            url=result.url,
            manifest=manifest,
            side_effects=side_effects,
        )

    def _from_index(self, entry: IndexEntry) -> ResolvedPath:
        return ResolvedPath(
            virtual_path=entry.virtual_path,
            url=self._store.source_url(entry.virtual_path),
            manifest=entry.manifest,
            side_effects=entry.side_effects,
        )

    @staticmethod
    def _ancestor_range(name: str, context: ResolutionContext) -> Optional[str]:
        ancestor = context.ancestor_manifest
        if ancestor is None:
            return None
        declared = ancestor.dependency_range(name)
        return declared if is_npm_range(declared) else None

    async def aclose(self) -> None:
        """Wait for background refreshes and close the HTTP client."""
        await self._cache.drain()
        if self._http is not None:
            await self._http.stop()

    async def __aenter__(self) -> "CdnResolver":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
