"""Tests for the virtual content store."""

from cdnresolve.packages.manifest import PackageManifest
from cdnresolve.store import VirtualContentStore


class TestVirtualPaths:
    """Tests for URL -> virtual path mapping."""

    def setup_method(self):
        self.store = VirtualContentStore()

    def test_version_is_dropped(self):
        """Virtual paths are version-agnostic."""
        assert self.store.virtual_path_for("https://unpkg.com/react@18.2.0/index.js") == "/node_modules/react/index.js"

    def test_scoped_packages(self):
        """The scope segment is kept."""
        assert self.store.virtual_path_for("https://unpkg.com/@babel/core@7.0.0/lib/index.js") == (
            "/node_modules/@babel/core/lib/index.js"
        )

    def test_origin_base_path_is_kept(self):
        """CDN base paths become part of the virtual path."""
        assert self.store.virtual_path_for("https://cdn.jsdelivr.net/npm/lodash@4/debounce.js") == (
            "/node_modules/npm/lodash/debounce.js"
        )

    def test_custom_root(self):
        """The root is normalized to a leading slash and no trailing one."""
        store = VirtualContentStore("vendor/")
        assert store.root == "/vendor"
        assert store.virtual_path_for("https://unpkg.com/react@18.2.0/index.js") == "/vendor/react/index.js"


class TestStoreContent:
    """Tests for stored files and the specifier index."""

    def setup_method(self):
        self.store = VirtualContentStore()

    def test_put_and_get(self):
        """Text is stored as UTF-8 and decoded on the way out."""
        self.store.put("/node_modules/a/index.js", "export const a = 'é';", url="https://unpkg.com/a@1.0.0/index.js")
        assert self.store.get("/node_modules/a/index.js") == "export const a = 'é';"
        assert self.store.entry("/node_modules/a/index.js").content == "export const a = 'é';".encode("utf-8")
        assert self.store.source_url("/node_modules/a/index.js") == "https://unpkg.com/a@1.0.0/index.js"
        assert "/node_modules/a/index.js" in self.store
        assert len(self.store) == 1

    def test_put_url(self):
        """put_url stores under the derived virtual path."""
        path = self.store.put_url("https://unpkg.com/react@18.2.0/index.js", b"module.exports = {};")
        assert path == "/node_modules/react/index.js"
        assert self.store.source_url(path) == "https://unpkg.com/react@18.2.0/index.js"

    def test_unknown_paths(self):
        """Unknown paths have no content and no source."""
        assert self.store.get("/node_modules/missing.js") is None
        assert self.store.entry("/node_modules/missing.js") is None
        assert self.store.source_url("/node_modules/missing.js") is None

    def test_remember_and_lookup(self):
        """The index maps specifier keys to virtual paths and metadata."""
        manifest = PackageManifest.from_dict({"name": "react", "sideEffects": False})
        self.store.remember("https://unpkg.com/react@latest", "/node_modules/react/index.js", manifest, False)

        assert self.store.lookup("https://unpkg.com/react@latest") == "/node_modules/react/index.js"
        entry = self.store.lookup_entry("https://unpkg.com/react@latest")
        assert entry.manifest is manifest
        assert entry.side_effects is False
        assert self.store.lookup("react") is None
