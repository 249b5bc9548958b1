"""Package specifier parsing: ``@scope/name@version/sub/path``."""

from __future__ import annotations

from ..constants import Constants
from ..errors import MalformedSpecifier
from .models import ParsedSpecifier


def parse_package_specifier(pure_path: str) -> ParsedSpecifier:
    """Split a bare specifier into name, version and subpath.

    Args:
        pure_path: Specifier with any CDN scheme/origin already stripped.

    Returns:
        ParsedSpecifier; ``version`` is "latest" when none was written.

    Raises:
        MalformedSpecifier: If the package name segment is empty.
    """
    scope = ""
    rest = pure_path
    if rest.startswith("@"):
        scope_name, sep, rest = rest[1:].partition("/")
        if not scope_name or not sep:
            raise MalformedSpecifier(pure_path, "scope without a package name")
        scope = f"@{scope_name}/"

    head, slash, tail = rest.partition("/")
    subpath = f"{slash}{tail}"

    version = ""
    name = head
    if "@" in head:
        name, _, version = head.rpartition("@")
    if not name:
        raise MalformedSpecifier(pure_path)

    return ParsedSpecifier(
        name=f"{scope}{name}",
        version=version or Constants.LATEST,
        subpath=subpath,
        has_explicit_version=bool(version),
    )
