"""Virtual content store.

Fetched CDN content is kept under synthetic filesystem-like paths rooted at
``/node_modules``, and every resolved specifier is indexed so resolving it
again costs a dictionary lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from yarl import URL

from .common.url_utils import normalize_path, strip_version_segment
from .constants import Constants

if TYPE_CHECKING:
    from .packages.manifest import PackageManifest


@dataclass(frozen=True)
class VirtualFileEntry:
    """Content stored under a virtual path."""

    virtual_path: str
    content: bytes
    url: Optional[str] = None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class IndexEntry:
    """What a previously resolved specifier maps to."""

    virtual_path: str
    manifest: Optional[PackageManifest] = None
    side_effects: Any = None


class VirtualContentStore:
    """Session-wide virtual file system and specifier index."""

    def __init__(self, root: str = Constants.VIRTUAL_ROOT):
        self._root = "/" + root.strip("/")
        self._files: Dict[str, VirtualFileEntry] = {}
        self._index: Dict[str, IndexEntry] = {}

    @property
    def root(self) -> str:
        return self._root

    def virtual_path_for(self, url: str) -> str:
        """Virtual path mirroring ``url``'s path, minus the version segment."""
        path = strip_version_segment(URL(url).path or "/")
        return normalize_path(f"{self._root}/{path}")

    def put(
        self,
        virtual_path: str,
        content: Union[bytes, str],
        url: Optional[str] = None,
    ) -> VirtualFileEntry:
        """Store content; an existing entry for the path is replaced."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        entry = VirtualFileEntry(virtual_path=virtual_path, content=content, url=url)
        self._files[virtual_path] = entry
        return entry

    def put_url(self, url: str, content: Union[bytes, str]) -> str:
        """Store content fetched from ``url`` and return its virtual path."""
        virtual_path = self.virtual_path_for(url)
        self.put(virtual_path, content, url=url)
        return virtual_path

    def get(self, virtual_path: str) -> Optional[str]:
        """Decoded content stored under ``virtual_path``."""
        entry = self._files.get(virtual_path)
        return entry.text if entry is not None else None

    def entry(self, virtual_path: str) -> Optional[VirtualFileEntry]:
        return self._files.get(virtual_path)

    def source_url(self, virtual_path: str) -> Optional[str]:
        """CDN URL the content under ``virtual_path`` was fetched from."""
        entry = self._files.get(virtual_path)
        return entry.url if entry is not None else None

    def remember(
        self,
        key: str,
        virtual_path: str,
        manifest: Optional[PackageManifest] = None,
        side_effects: Any = None,
    ) -> None:
        """Index a specifier (or URL) as resolving to ``virtual_path``."""
        self._index[key] = IndexEntry(
            virtual_path=virtual_path,
            manifest=manifest,
            side_effects=side_effects,
        )

    def lookup(self, key: str) -> Optional[str]:
        entry = self._index.get(key)
        return entry.virtual_path if entry is not None else None

    def lookup_entry(self, key: str) -> Optional[IndexEntry]:
        return self._index.get(key)

    def __contains__(self, virtual_path: object) -> bool:
        return virtual_path in self._files

    def __len__(self) -> int:
        return len(self._files)
