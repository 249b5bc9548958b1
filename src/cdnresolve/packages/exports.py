"""Modern (``exports`` / ``imports``) and legacy entry-point resolution.

``resolve_exports`` follows Node's package entry-point rules: exact subpath
keys, ``*`` patterns where the longest prefix wins, trailing-``/`` folder
mappings, and nested condition objects walked in document order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..common.fallback import first_of
from ..constants import Constants


@dataclass(frozen=True)
class ConditionSet:
    """A named group of resolution conditions.

    ``unsafe`` drops the implicit ``import``/``require`` and
    ``browser``/``node`` conditions, keeping only ``default`` and the
    explicit ones.
    """

    name: str
    conditions: Tuple[str, ...] = ()
    browser: bool = False
    require: bool = False
    unsafe: bool = False

    def allowed(self) -> FrozenSet[str]:
        allowed = {"default", *self.conditions}
        if not self.unsafe:
            allowed.add("require" if self.require else "import")
            allowed.add("browser" if self.browser else "node")
        return frozenset(allowed)


CONDITION_SETS = (
    ConditionSet("browser", conditions=("module",), browser=True),
    ConditionSet("unsafe", conditions=("deno", "worker", "production"), unsafe=True),
    ConditionSet("require", require=True),
)


def to_relative(subpath: str) -> str:
    """``/x`` -> ``./x``; the package root ("" or "/") -> ``.``."""
    stripped = subpath.strip("/")
    return f"./{stripped}" if stripped else "."


def to_absolute(entry: str) -> str:
    """``./x`` or ``x`` -> ``/x``."""
    if entry.startswith("./"):
        entry = entry[2:]
    return "/" + entry.lstrip("/")


def _normalize_entry(name: str, entry: str) -> str:
    if entry in ("", ".", "./", "/"):
        return "."
    if name and entry == name:
        return "."
    if name and entry.startswith(name + "/"):
        entry = entry[len(name):]
    if entry.startswith("./") or entry.startswith("#"):
        return entry
    if entry.startswith("/"):
        return "." + entry
    return "./" + entry


def _walk(target: Any, allowed: FrozenSet[str]) -> List[str]:
    if isinstance(target, str):
        return [target]
    if isinstance(target, list):
        found: List[str] = []
        for item in target:
            found.extend(_walk(item, allowed))
        return found
    if isinstance(target, dict):
        for key, value in target.items():
            if key in allowed:
                return _walk(value, allowed)
    return []


def _match(mapping: Mapping[str, Any], entry: str, allowed: FrozenSet[str]) -> Optional[List[str]]:
    if entry in mapping:
        return _walk(mapping[entry], allowed) or None

    best_key: Optional[str] = None
    best_prefix = -1
    captured = ""
    for key in mapping:
        if "*" in key:
            prefix, _, suffix = key.partition("*")
            if (
                entry.startswith(prefix)
                and entry.endswith(suffix)
                and len(entry) >= len(prefix) + len(suffix)
                and len(prefix) > best_prefix
            ):
                best_key, best_prefix = key, len(prefix)
                captured = entry[len(prefix):len(entry) - len(suffix)]
        elif key.endswith("/") and entry.startswith(key) and len(key) > best_prefix:
            best_key, best_prefix = key, len(key)
            captured = entry[len(key):]

    if best_key is None:
        return None
    targets = _walk(mapping[best_key], allowed)
    if not targets:
        return None
    if "*" in best_key:
        return [t.replace("*", captured) for t in targets]
    return [t + captured for t in targets]


def _exports_map(exports: Any) -> Optional[Dict[str, Any]]:
    if isinstance(exports, (str, list)):
        return {".": exports}
    if isinstance(exports, dict):
        if exports and not any(str(k).startswith(".") for k in exports):
            return {".": exports}
        return exports
    return None


def resolve_exports(
    pkg: Mapping[str, Any],
    entry: str = ".",
    condition_set: ConditionSet = CONDITION_SETS[0],
) -> Optional[List[str]]:
    """Resolve ``entry`` through the manifest's ``exports`` field.

    Returns:
        The matching targets (first is preferred) or None.
    """
    mapping = _exports_map(pkg.get("exports"))
    if not mapping:
        return None
    name = pkg.get("name") if isinstance(pkg.get("name"), str) else ""
    return _match(mapping, _normalize_entry(name, entry), condition_set.allowed())


def resolve_imports(
    pkg: Mapping[str, Any],
    entry: str,
    condition_set: ConditionSet = CONDITION_SETS[0],
) -> Optional[List[str]]:
    """Resolve a ``#subpath`` import through the manifest's ``imports`` field."""
    mapping = pkg.get("imports")
    if not isinstance(mapping, dict) or not entry.startswith("#"):
        return None
    return _match(mapping, entry, condition_set.allowed())


def _first_target(targets: Optional[List[str]]) -> Optional[str]:
    return targets[0] if targets else None


def modern_resolve(
    pkg: Mapping[str, Any],
    entry: str,
    condition_sets: Iterable[ConditionSet] = CONDITION_SETS,
    field: str = "exports",
) -> Optional[str]:
    """Try each condition set in turn; the first match wins."""
    resolver = resolve_imports if field == "imports" else resolve_exports
    return first_of(
        (lambda cs=cs: _first_target(resolver(pkg, entry, cs))) for cs in condition_sets
    )


def resolve_legacy(pkg: Mapping[str, Any], fields: Iterable[str] = ("module", "main")) -> Any:
    """Return the first populated legacy field value (str, list or dict)."""
    for field_name in fields:
        value = pkg.get(field_name)
        if value:
            return value
    return None


def _is_production_key(key: str) -> bool:
    return not key.endswith(".cjs") and "src/" not in key


def pick_legacy_entry(mapping: Mapping[str, Any]) -> Optional[Tuple[str, Any]]:
    """Choose an entry from a legacy input-path -> output-path map.

    Prefers the first key with a truthy value that isn't a ``.cjs`` file nor
    under a ``src/`` directory, else the first key.
    """
    for key, value in mapping.items():
        if value and _is_production_key(key):
            return key, value
    for key, value in mapping.items():
        return key, value
    return None


def first_valid_value(value: Any) -> Optional[str]:
    """Collapse a legacy field value (str, list or map) to one path."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, list):
        return first_valid_value(value[0]) if value else None
    if isinstance(value, dict):
        picked = pick_legacy_entry(value)
        if picked is None:
            return None
        return picked[0]
    return None


def legacy_resolve(pkg: Mapping[str, Any]) -> Optional[str]:
    """Browser-mode legacy fields first, then ``unpkg``/``bin``."""
    return first_of((
        lambda: first_valid_value(
            resolve_legacy(pkg, fields=Constants.LEGACY_BROWSER_FIELDS)
        ),
        lambda: first_valid_value(resolve_legacy(pkg, fields=Constants.LEGACY_FALLBACK_FIELDS)),
    ))
