"""CDN origin resolution.

Maps a specifier's scheme prefix (``esm:``, ``unpkg:``...) or its already
fully-qualified CDN URL to a normalized origin, and strips that prefix to
leave the "pure" import path:

    resolve_origin("react").origin                      # https://unpkg.com/
    resolve_origin("react", "https://cdn.skypack.dev")  # https://cdn.skypack.dev/
    resolve_origin("esm:react", "https://cdn.skypack.dev").origin
    # https://cdn.esm.sh/  (schemes take precedence over the default)
"""

from __future__ import annotations

import re
import urllib.parse
from typing import Optional, Tuple

from ..common.url_utils import url_join
from ..constants import CdnStyle, Constants
from .models import CdnTarget

_SCHEME = re.compile(r"^([a-z][a-z.]*):")
_HTTP = re.compile(r"^https?://", re.IGNORECASE)


def _split_scheme(specifier: str) -> Tuple[Optional[str], str]:
    """Return (scheme, rest) when the specifier starts with a CDN scheme."""
    match = _SCHEME.match(specifier)
    if match and match.group(1) in Constants.CDN_SCHEMES:
        return match.group(1), specifier[match.end():]
    return None, specifier


def _match_known_origin(url: str) -> Optional[Tuple[str, CdnStyle, str]]:
    """Match a fully-qualified URL against the known CDN origins.

    Returns:
        Tuple of (origin, style, remaining path) or None.
    """
    if not _HTTP.match(url):
        return None
    scheme, _, rest = url.partition("://")
    for base, style in Constants.KNOWN_ORIGINS:
        if rest == base or rest.startswith(base + "/"):
            return f"{scheme.lower()}://{base}/", style, rest[len(base):]
    return None


def _with_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


def get_cdn_style(url_or_specifier: str) -> CdnStyle:
    """Classify the CDN style of a scheme-prefixed specifier or a URL."""
    scheme, _ = _split_scheme(url_or_specifier)
    if scheme:
        return Constants.SCHEME_STYLES[scheme]
    known = _match_known_origin(url_or_specifier)
    if known:
        return known[1]
    return CdnStyle.OTHER


def get_cdn_origin(specifier: str, cdn: str = Constants.DEFAULT_CDN_HOST) -> str:
    """Pick the CDN origin for a specifier; always ends with '/'."""
    scheme, _ = _split_scheme(specifier)
    if scheme:
        return _with_slash(Constants.CDN_SCHEMES[scheme])
    known = _match_known_origin(specifier)
    if known:
        return known[0]
    return _with_slash(cdn)


def get_pure_import_path(specifier: str) -> str:
    """Remove CDN schemes and known CDN hosts, leaving only the import path."""
    _, path = _split_scheme(specifier)
    known = _match_known_origin(path)
    if known:
        path = known[2]
    return path[1:] if path.startswith("/") else path


def resolve_origin(specifier: str, default_cdn: str = Constants.DEFAULT_CDN_HOST) -> CdnTarget:
    """Build the :class:`CdnTarget` for a specifier.

    A fully-qualified URL on a host we don't know is kept as-is: its own
    origin is used and the target is flagged ``is_literal_url`` so no
    package.json semantics are applied to it.
    """
    _, rest = _split_scheme(specifier)
    if _HTTP.match(rest) and _match_known_origin(rest) is None:
        parts = urllib.parse.urlsplit(rest)
        origin = f"{parts.scheme}://{parts.netloc}/"
        path = rest[len(origin):]
        return CdnTarget(
            specifier=specifier,
            origin=origin,
            path=path,
            url=rest,
            style=CdnStyle.OTHER,
            is_literal_url=True,
        )

    origin = get_cdn_origin(specifier, default_cdn)
    path = get_pure_import_path(specifier)
    return CdnTarget(
        specifier=specifier,
        origin=origin,
        path=path,
        url=url_join(origin, path),
        style=get_cdn_style(origin),
    )
