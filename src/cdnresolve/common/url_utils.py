"""URL and virtual path helpers."""
from __future__ import annotations

import posixpath
import re
import urllib.parse

_WHITESPACE_ENCODINGS = {
    "\t": "%09",
    "\n": "%0A",
    "\x0b": "%0B",
    "\x0c": "%0C",
    "\r": "%0D",
    " ": "%20",
}
_WHITESPACE = re.compile(r"\s")
_SLASHES = re.compile(r"/{2,}")


def encode_whitespace(text: str) -> str:
    """Percent-encode whitespace characters, leaving everything else alone."""
    return _WHITESPACE.sub(lambda m: _WHITESPACE_ENCODINGS.get(m.group(0), m.group(0)), text)


def normalize_path(path: str) -> str:
    """Collapse duplicate slashes and dot segments of a posix path."""
    trailing = path.endswith("/") and path != "/"
    collapsed = _SLASHES.sub("/", path)
    normalized = posixpath.normpath(collapsed) if collapsed else "/"
    if normalized == ".":
        normalized = "/"
    if trailing and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def _escape_segment(part: str) -> str:
    return part.replace("%", "%25").replace("\\", "%5C")


def url_join(url: str, *parts: str) -> str:
    """Join path segments onto a URL's path, posix style.

    Unlike ``urljoin``, absolute segments do not reset the path:
    ``url_join("https://unpkg.com/", "react@18", "/index.js")`` yields
    ``https://unpkg.com/react@18/index.js``. Literal ``%`` and ``\\`` in
    the joined parts are escaped; the base URL is kept as given.
    """
    split = urllib.parse.urlsplit(url)
    escaped = [_escape_segment(p) for p in parts if p]
    joined = "/".join([split.path or "/", *escaped])
    path = encode_whitespace(normalize_path("/" + joined))
    return urllib.parse.urlunsplit((split.scheme, split.netloc, path, split.query, ""))


def strip_version_segment(path: str) -> str:
    """Drop the ``@version`` suffix of the first versioned path segment.

    ``/react@18.2.0/index.js`` becomes ``/react/index.js`` and
    ``/@babel/core@7.0.0/lib/index.js`` becomes ``/@babel/core/lib/index.js``.
    Scope segments (leading ``@``) are never treated as versions.
    """
    segments = path.split("/")
    for index, segment in enumerate(segments):
        at = segment.find("@", 1)
        if at > 0:
            segments[index] = segment[:at]
            break
    return "/".join(segments)
