"""Content-type hints for loaded files."""

from __future__ import annotations

import posixpath

from .constants import Constants, Loader

# Extension -> loader. Anything missing falls back to text, and paths with
# no extension at all are assumed to be modules.
LOADERS = {
    ".tsx": Loader.TSX,
    ".ts": Loader.TS,
    ".jsx": Loader.TSX,
    ".js": Loader.TS,
    ".mjs": Loader.TS,
    ".cjs": Loader.TS,
    ".mts": Loader.TS,
    ".cts": Loader.TS,
    ".css": Loader.CSS,
    ".scss": Loader.CSS,
    ".json": Loader.JSON,
    ".wasm": Loader.FILE,
}
LOADERS.update({extension: Loader.DATAURL for extension in Constants.DATAURL_EXTENSIONS})
LOADERS.update({extension: Loader.TEXT for extension in Constants.TEXT_EXTENSIONS})


def content_type_hint(path: str) -> Loader:
    """Pick the loader a bundler should use for ``path``.

    >>> content_type_hint("/node_modules/react/index.js").value
    'ts'
    >>> content_type_hint("/node_modules/pkg/logo.svg").value
    'text'
    """
    _, extension = posixpath.splitext(path.split("?", 1)[0])
    if not extension:
        return Loader.TS
    return LOADERS.get(extension.lower(), Loader.TEXT)
