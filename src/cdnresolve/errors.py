"""Error taxonomy for specifier resolution.

Only ``MalformedSpecifier`` and ``UnresolvableSpecifier`` (including its
``ContentFetchFailure`` subclass) escape a resolve call. The manifest and
entry-point failures are absorbed by the package metadata resolver.
"""

from __future__ import annotations

from typing import Optional


class ResolutionError(Exception):
    """Base class for every error raised while resolving a specifier."""


class MalformedSpecifier(ResolutionError, ValueError):
    """Raised when a bare specifier has no package name."""

    def __init__(self, specifier: str, reason: str = "empty package name"):
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"Malformed specifier {specifier!r}: {reason}")


class FetchError(ResolutionError):
    """A request completed but the CDN answered with a non-2xx status."""

    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Couldn't load {url} ({status} code)")


class ManifestFetchFailure(ResolutionError):
    """None of the package.json candidates could be fetched."""

    def __init__(self, name: str, urls, cause: Optional[BaseException] = None):
        self.name = name
        self.urls = list(urls)
        self.cause = cause
        super().__init__(
            f"All package.json fetches failed for {name}: {', '.join(self.urls)}"
        )


class EntryResolutionFailure(ResolutionError):
    """Neither the exports map nor the legacy fields produced an entry."""

    def __init__(self, name: str, subpath: str):
        self.name = name
        self.subpath = subpath
        super().__init__(f"No entry point for {name}{subpath or ''}")


class UnresolvableSpecifier(ResolutionError):
    """Every fallback was exhausted for a specifier."""


class ContentFetchFailure(UnresolvableSpecifier):
    """No extension variant of a URL could be fetched.

    ``cause`` is the error raised by the first variant tried, which is the
    closest to what the import actually asked for.
    """

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Couldn't fetch content for {url}{detail}")
