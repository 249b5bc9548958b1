"""Resolve JavaScript import specifiers against public CDNs."""

from .common.logging_utils import configure_logging
from .config import ResolverConfig
from .constants import CdnStyle, Constants, Loader, SpecifierKind
from .errors import (
    ContentFetchFailure,
    EntryResolutionFailure,
    FetchError,
    MalformedSpecifier,
    ManifestFetchFailure,
    ResolutionError,
    UnresolvableSpecifier,
)
from .loaders import content_type_hint
from .plugin import CdnPlugin, OnLoadArgs, OnLoadResult, OnResolveArgs, OnResolveResult
from .resolver import CdnResolver, LoadResult, ResolutionContext, ResolvedPath
from .store import VirtualContentStore

__version__ = "0.1.0"

__all__ = [
    "CdnPlugin",
    "CdnResolver",
    "CdnStyle",
    "Constants",
    "ContentFetchFailure",
    "EntryResolutionFailure",
    "FetchError",
    "Loader",
    "LoadResult",
    "MalformedSpecifier",
    "ManifestFetchFailure",
    "OnLoadArgs",
    "OnLoadResult",
    "OnResolveArgs",
    "OnResolveResult",
    "ResolutionContext",
    "ResolutionError",
    "ResolvedPath",
    "ResolverConfig",
    "SpecifierKind",
    "UnresolvableSpecifier",
    "VirtualContentStore",
    "configure_logging",
    "content_type_hint",
]
