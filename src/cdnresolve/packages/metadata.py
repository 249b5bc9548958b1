"""Package metadata resolution.

Fetches the package.json candidates for a bare specifier and works out
which file inside the package the subpath refers to.
"""

from __future__ import annotations

import asyncio
import logging
import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

import aiohttp

from ..common.fallback import first_settled
from ..common.logging_utils import extra_context, is_debug_enabled, safe_url
from ..common.url_utils import url_join
from ..constants import Constants
from ..errors import EntryResolutionFailure, FetchError, ManifestFetchFailure, ResolutionError
from ..fetching.cache import FetchCache
from ..specifiers.models import CdnTarget, ParsedSpecifier
from ..store import VirtualContentStore
from .exports import legacy_resolve, modern_resolve, to_absolute, to_relative
from .manifest import PackageManifest
from .versions import VersionPins

if TYPE_CHECKING:
    from ..resolver import ResolutionContext

logger = logging.getLogger(__name__)

MANIFEST_ERRORS = (ResolutionError, aiohttp.ClientError, asyncio.TimeoutError)


@dataclass(frozen=True)
class PackageEntry:
    """Outcome of entry-point resolution for one bare specifier."""

    name: str
    version: str
    subpath: str  # "" or starts with "/"
    manifest: Optional[PackageManifest] = None
    from_subpath_manifest: bool = False

    def to_path(self) -> str:
        return f"{self.name}@{self.version}{self.subpath}"


class PackageMetadataResolver:
    """Resolves package entry points from CDN-hosted package.json files."""

    def __init__(self, cache: FetchCache, store: VirtualContentStore, pins: VersionPins):
        self._cache = cache
        self._store = store
        self._pins = pins
        self._failed: Set[str] = set()
        self._manifests: Dict[str, PackageManifest] = {}

    @property
    def failed_urls(self) -> Set[str]:
        return set(self._failed)

    def candidate_urls(self, parsed: ParsedSpecifier, origin: str) -> List[Tuple[str, bool]]:
        """package.json URLs to try, paired with "is subpath-local".

        A directory-like subpath gets its own package.json candidate ahead of
        the package root's. For the package root both collapse into a single
        candidate that counts as subpath-local.
        """
        directory = parsed.directory
        is_directory = not posixpath.splitext(directory)[1]
        base = f"{parsed.name}@{parsed.version}"
        locations = []
        if is_directory:
            locations.append((f"{base}{directory}/{Constants.PACKAGE_JSON_FILE}", True))
        locations.append((f"{base}/{Constants.PACKAGE_JSON_FILE}", False))

        candidates: List[Tuple[str, bool]] = []
        seen: Set[str] = set()
        for location, is_subpath in locations:
            url = url_join(origin, location)
            if url not in seen:
                seen.add(url)
                candidates.append((url, is_subpath))
        return candidates

    async def resolve_package_entry(
        self,
        parsed: ParsedSpecifier,
        target: CdnTarget,
        context: Optional["ResolutionContext"] = None,
    ) -> PackageEntry:
        """Find the file a bare specifier refers to.

        Args:
            parsed: The parsed specifier, version already chosen.
            target: CDN target the specifier maps to.
            context: The importing module's context. Dependency ranges its
                manifest declares are merged into peerDependencies.

        Returns:
            PackageEntry. Manifest failures never raise: the subpath is then
            used as a literal path and ``manifest`` is None.
        """
        candidates = self.candidate_urls(parsed, target.origin)
        try:
            index, manifest = await first_settled(
                [self._fetch_manifest(parsed.name, url) for url, _ in candidates],
                errors=MANIFEST_ERRORS,
            )
        except MANIFEST_ERRORS as exc:
            failure = ManifestFetchFailure(parsed.name, [url for url, _ in candidates], exc)
            logger.warning(
                "%s; using %s as a literal path",
                failure,
                parsed.to_path(),
                extra=extra_context(event="manifest_fallback", component="metadata", package=parsed.name),
            )
            return PackageEntry(name=parsed.name, version=parsed.version, subpath=parsed.directory)

        from_subpath = candidates[index][1]
        name, version = parsed.name, parsed.version
        if manifest.name and manifest.name == parsed.name and manifest.version:
            self._pins.pin(manifest.name, manifest.version)
            name, version = manifest.name, manifest.version

        try:
            subpath = self._resolve_entry(manifest, parsed, from_subpath)
        except EntryResolutionFailure as exc:
            logger.warning("%s; falling back to the literal subpath", exc)
            subpath = ""

        directory = parsed.directory
        if from_subpath and directory:
            subpath = f"{directory}{subpath}"

        derived = manifest.with_peer_versions(self._known_versions(manifest, context))

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved package entry",
                extra=extra_context(
                    event="entry_resolved",
                    component="metadata",
                    package=name,
                    version=version,
                    subpath=subpath,
                    subpath_manifest=from_subpath,
                ),
            )
        return PackageEntry(
            name=name,
            version=version,
            subpath=subpath,
            manifest=derived,
            from_subpath_manifest=from_subpath,
        )

    def _known_versions(self, manifest: PackageManifest, context) -> Dict[str, str]:
        known = self._pins.known()
        ancestor = context.ancestor_manifest if context is not None else None
        if ancestor is not None:
            for peer in manifest.peer_dependencies:
                declared = ancestor.dependency_range(peer)
                if declared:
                    known[peer] = declared
        return known

    def _resolve_entry(self, manifest: PackageManifest, parsed: ParsedSpecifier, from_subpath: bool) -> str:
        """exports first, then legacy fields, then the subpath itself."""
        entry = "." if from_subpath else to_relative(parsed.subpath)
        modern = modern_resolve(manifest.raw, entry)
        if modern:
            return to_absolute(modern)
        if not from_subpath:
            return "" if entry == "." else to_absolute(entry)

        legacy = legacy_resolve(manifest.raw)
        if legacy:
            return to_absolute(legacy)
        raise EntryResolutionFailure(parsed.name, parsed.subpath)

    async def _fetch_manifest(self, name: str, url: str) -> PackageManifest:
        known = self._manifests.get(url)
        if known is not None:
            return known
        if url in self._failed:
            raise ManifestFetchFailure(name, [url])

        response = await self._cache.get(url, permanent=True)
        if not response.ok:
            self._failed.add(url)
            raise FetchError(url, response.status)
        try:
            manifest = PackageManifest.from_dict(response.json(), url=response.effective_url)
        except (ValueError, TypeError) as exc:
            self._failed.add(url)
            logger.debug("Invalid package.json at %s: %s", safe_url(url), exc)
            raise ManifestFetchFailure(name, [url], exc) from exc

        self._manifests[url] = manifest
        virtual_path = self._store.put_url(response.effective_url, response.body)
        self._store.remember(url, virtual_path, manifest=manifest)
        return manifest
