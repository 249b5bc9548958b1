"""Data models for specifier parsing and CDN targeting."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import CdnStyle, Constants


@dataclass(frozen=True)
class ParsedSpecifier:
    """A bare specifier split into package name, version and subpath."""

    name: str
    version: str = Constants.LATEST
    subpath: str = ""  # "" or starts with "/"
    has_explicit_version: bool = False

    def to_path(self) -> str:
        """Re-join as ``name@version/subpath``."""
        return f"{self.name}@{self.version}{self.subpath}"

    @property
    def directory(self) -> str:
        """Subpath without trailing slashes; "" for the package root."""
        return self.subpath.rstrip("/")


@dataclass(frozen=True)
class CdnTarget:
    """Where a specifier lives on a CDN."""

    specifier: str
    origin: str  # always ends with "/"
    path: str  # specifier with scheme / known origin stripped
    url: str
    style: CdnStyle
    is_literal_url: bool = False
