"""Specifier classification: bare, relative or absolute."""

from __future__ import annotations

import re

from ..constants import SpecifierKind

_WINDOWS_ABSOLUTE = re.compile(r"^[A-Za-z]:[\\/]")


def classify(specifier: str) -> SpecifierKind:
    """Classify an import specifier without touching the network."""
    if specifier.startswith("."):
        return SpecifierKind.RELATIVE
    if specifier.startswith(("/", "\\")) or _WINDOWS_ABSOLUTE.match(specifier):
        return SpecifierKind.ABSOLUTE
    return SpecifierKind.BARE


def is_bare(specifier: str) -> bool:
    """An import counts as bare if it's neither relative nor absolute."""
    return classify(specifier) is SpecifierKind.BARE


def is_relative(specifier: str) -> bool:
    return classify(specifier) is SpecifierKind.RELATIVE


def is_virtual_path(path: str, root: str) -> bool:
    """True if ``path`` sits under the virtual root (e.g. ``/node_modules``)."""
    root = root.rstrip("/")
    return path == root or path.startswith(root + "/")
