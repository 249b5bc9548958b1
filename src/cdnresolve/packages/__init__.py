"""package.json handling: manifests, entry points and version pins."""

from .exports import CONDITION_SETS, ConditionSet, legacy_resolve, modern_resolve
from .manifest import PackageManifest
from .metadata import PackageEntry, PackageMetadataResolver
from .versions import VersionPins

__all__ = [
    "CONDITION_SETS",
    "ConditionSet",
    "PackageEntry",
    "PackageManifest",
    "PackageMetadataResolver",
    "VersionPins",
    "legacy_resolve",
    "modern_resolve",
]
