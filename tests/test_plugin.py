"""Tests for the bundler plugin adapter."""

import asyncio
import json

from cdnresolve.fetching.client import CachedResponse
from cdnresolve.plugin import CdnPlugin, OnLoadArgs, OnResolveArgs
from cdnresolve.resolver import CdnResolver


class _FakeClient:
    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    async def fetch(self, url, method="GET"):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return CachedResponse(url=url, status=404, body=b"Not found")
        status, body = route
        if not isinstance(body, (bytes, str)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return CachedResponse(url=url, status=status, body=body)


ROUTES = {
    "https://unpkg.com/react-dom@latest/package.json": (
        200,
        {
            "name": "react-dom",
            "version": "18.2.0",
            "main": "index.js",
            "dependencies": {"scheduler": "^0.23.0"},
        },
    ),
    "https://unpkg.com/react-dom@18.2.0/index.js": (200, "import 'scheduler';"),
    "https://unpkg.com/scheduler@^0.23.0/package.json": (
        200,
        {"name": "scheduler", "version": "0.23.0", "main": "index.js"},
    ),
    "https://unpkg.com/scheduler@0.23.0/index.js": (200, "export const s = 1;"),
}


class TestCdnPlugin:
    """Tests for CdnPlugin hooks."""

    def setup_method(self):
        self.client = _FakeClient(ROUTES)
        self.plugin = CdnPlugin(CdnResolver(client=self.client))

    def test_resolve_then_load(self):
        """on_resolve and on_load hand the manifest along as plugin data."""
        resolved = asyncio.run(self.plugin.on_resolve(OnResolveArgs(path="react-dom")))

        assert resolved.path == "/node_modules/react-dom/index.js"
        assert resolved.namespace == "cdn"
        assert resolved.plugin_data.name == "react-dom"

        loaded = self.plugin.on_load(OnLoadArgs(path=resolved.path, plugin_data=resolved.plugin_data))

        assert loaded.contents == "import 'scheduler';"
        assert loaded.loader == "ts"
        assert loaded.resolve_dir == "/node_modules/react-dom"
        assert loaded.plugin_data is resolved.plugin_data

    def test_dependency_range_from_plugin_data(self):
        """A module's imports use its package's declared ranges."""

        async def _run():
            parent = await self.plugin.on_resolve(OnResolveArgs(path="react-dom"))
            return await self.plugin.on_resolve(
                OnResolveArgs(path="scheduler", importer=parent.path, plugin_data=parent.plugin_data)
            )

        child = asyncio.run(_run())

        assert child.path == "/node_modules/scheduler/index.js"
        assert "https://unpkg.com/scheduler@^0.23.0/package.json" in self.client.calls

    def test_project_files_are_declined(self):
        """Paths outside the virtual root are left to the bundler."""
        result = asyncio.run(self.plugin.on_resolve(OnResolveArgs(path="./app", importer="/src/index.ts")))
        assert result is None

    def test_load_other_namespace(self):
        assert self.plugin.on_load(OnLoadArgs(path="/src/index.ts", namespace="file")) is None

    def test_load_unknown_path(self):
        assert self.plugin.on_load(OnLoadArgs(path="/node_modules/unknown.js")) is None
