"""First-discovered version pinning.

Full semver solving is out of scope: the first concrete version fetched for
a package is pinned, and later requests reuse it whenever it satisfies what
they ask for.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import semantic_version

from ..constants import Constants

logger = logging.getLogger(__name__)


def is_exact_version(spec: Optional[str]) -> bool:
    """True for a concrete semver like ``18.2.0`` or ``1.0.0-beta.1``."""
    if not spec:
        return False
    try:
        semantic_version.Version(spec)
    except ValueError:
        return False
    return True


def is_npm_range(spec: Optional[str]) -> bool:
    """True if ``spec`` parses as an npm range (``^1.2.0``, ``1.x``, ``>=1 <2``)."""
    if not spec:
        return False
    try:
        semantic_version.NpmSpec(spec)
    except ValueError:
        return False
    return True


def satisfies(version: str, spec: str) -> bool:
    """Check a concrete version against an npm range."""
    try:
        return semantic_version.Version(version) in semantic_version.NpmSpec(spec)
    except ValueError:
        return False


class VersionPins:
    """Session-wide map of package name -> first concrete version seen."""

    def __init__(self) -> None:
        self._pins: Dict[str, str] = {}

    def pin(self, name: str, version: str) -> str:
        """Record ``version`` for ``name`` unless one is already pinned."""
        if not name or not is_exact_version(version):
            return self._pins.get(name, version)
        pinned = self._pins.setdefault(name, version)
        if pinned == version:
            logger.debug("Pinned %s@%s", name, version)
        return pinned

    def get(self, name: str) -> Optional[str]:
        return self._pins.get(name)

    def known(self) -> Dict[str, str]:
        return dict(self._pins)

    def choose(self, name: str, requested: Optional[str]) -> str:
        """Pick the version to fetch for ``name``.

        The pinned version wins when nothing specific was requested or when
        it satisfies the requested range; otherwise the request is kept.
        """
        pinned = self._pins.get(name)
        if not requested or requested == Constants.LATEST:
            return pinned or Constants.LATEST
        if is_exact_version(requested):
            return requested
        if pinned and is_npm_range(requested) and satisfies(pinned, requested):
            return pinned
        return requested
