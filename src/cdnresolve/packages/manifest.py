"""Parsed package.json metadata."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..constants import Constants


def _str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items() if isinstance(v, str)}


@dataclass(frozen=True)
class PackageManifest:
    """Read-only view of a package.json document.

    Attributes:
        name: Package name ("" when the manifest has none).
        version: Package version ("" when the manifest has none).
        exports: The ``exports`` field, untouched.
        imports: The ``imports`` field (``#subpath`` imports), untouched.
        main / module / browser / unpkg / bin: Legacy entry-point fields.
        dependencies / dev_dependencies / peer_dependencies /
        optional_dependencies: Version ranges by package name.
        side_effects: The ``sideEffects`` field.
        raw: The full document as parsed.
        url: Where the manifest was fetched from, if it was fetched.
    """

    name: str = ""
    version: str = ""
    exports: Any = None
    imports: Any = None
    main: Any = None
    module: Any = None
    browser: Any = None
    unpkg: Any = None
    bin: Any = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    optional_dependencies: Dict[str, str] = field(default_factory=dict)
    side_effects: Any = None
    raw: Dict[str, Any] = field(default_factory=dict)
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], url: Optional[str] = None) -> "PackageManifest":
        """Build a manifest from a decoded package.json document."""
        if not isinstance(data, Mapping):
            raise TypeError("package.json must decode to an object")
        name = data.get("name")
        version = data.get("version")
        return cls(
            name=name if isinstance(name, str) else "",
            version=version if isinstance(version, str) else "",
            exports=data.get("exports"),
            imports=data.get("imports"),
            main=data.get("main"),
            module=data.get("module"),
            browser=data.get("browser"),
            unpkg=data.get("unpkg"),
            bin=data.get("bin"),
            dependencies=_str_map(data.get("dependencies")),
            dev_dependencies=_str_map(data.get("devDependencies")),
            peer_dependencies=_str_map(data.get("peerDependencies")),
            optional_dependencies=_str_map(data.get("optionalDependencies")),
            side_effects=data.get("sideEffects"),
            raw=dict(data),
            url=url,
        )

    def _field_map(self, field_name: str) -> Dict[str, str]:
        return {
            "dependencies": self.dependencies,
            "peerDependencies": self.peer_dependencies,
            "optionalDependencies": self.optional_dependencies,
            "devDependencies": self.dev_dependencies,
        }[field_name]

    def dependency_range(self, name: str) -> Optional[str]:
        """Version range this manifest declares for ``name``, if any."""
        for field_name in Constants.DEPENDENCY_FIELDS:
            declared = self._field_map(field_name).get(name)
            if declared:
                return declared
        return None

    def with_peer_versions(self, known: Mapping[str, str]) -> "PackageManifest":
        """Derived copy whose peerDependencies use the ``known`` versions.

        Only peers this manifest already declares are patched.
        """
        patched = {
            peer: known.get(peer, declared)
            for peer, declared in self.peer_dependencies.items()
        }
        if patched == self.peer_dependencies:
            return self
        return dataclasses.replace(self, peer_dependencies=patched)

    @property
    def package_root_url(self) -> Optional[str]:
        """URL of the directory holding this manifest."""
        if not self.url:
            return None
        return self.url.rsplit("/", 1)[0] + "/"
