"""Bundler plugin adapter.

Maps a bundler's resolve/load hooks onto a :class:`CdnResolver`. The
package manifest travels between hooks as ``plugin_data`` so a module's
own imports are resolved against the package it came from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .constants import Constants
from .packages.manifest import PackageManifest
from .resolver import CdnResolver, ResolutionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OnResolveArgs:
    path: str
    importer: str = ""
    namespace: str = ""
    plugin_data: Any = None


@dataclass(frozen=True)
class OnResolveResult:
    path: str
    namespace: str = Constants.NAMESPACE
    plugin_data: Optional[PackageManifest] = None
    side_effects: Any = None


@dataclass(frozen=True)
class OnLoadArgs:
    path: str
    namespace: str = Constants.NAMESPACE
    plugin_data: Any = None


@dataclass(frozen=True)
class OnLoadResult:
    contents: str
    loader: str
    resolve_dir: str
    plugin_data: Optional[PackageManifest] = None


class CdnPlugin:
    """Resolve and load hooks backed by a resolver session."""

    name = Constants.NAMESPACE

    def __init__(self, resolver: CdnResolver):
        self._resolver = resolver

    async def on_resolve(self, args: OnResolveArgs) -> Optional[OnResolveResult]:
        """Resolve an import; None hands it back to the bundler."""
        manifest = args.plugin_data if isinstance(args.plugin_data, PackageManifest) else None
        context = ResolutionContext(importer_path=args.importer, ancestor_manifest=manifest)
        resolved = await self._resolver.resolve(args.path, context)
        if resolved is None:
            return None
        return OnResolveResult(
            path=resolved.virtual_path,
            namespace=resolved.namespace,
            plugin_data=resolved.manifest,
            side_effects=resolved.side_effects,
        )

    def on_load(self, args: OnLoadArgs) -> Optional[OnLoadResult]:
        """Serve content for paths in the ``cdn`` namespace."""
        if args.namespace != Constants.NAMESPACE:
            return None
        loaded = self._resolver.load(args.path)
        if loaded is None:
            logger.warning("Nothing stored for %s", args.path)
            return None
        manifest = args.plugin_data if isinstance(args.plugin_data, PackageManifest) else None
        return OnLoadResult(
            contents=loaded.content,
            loader=loaded.content_type_hint.value,
            resolve_dir=loaded.resolve_dir,
            plugin_data=manifest,
        )
