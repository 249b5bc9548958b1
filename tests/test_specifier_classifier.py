"""Tests for specifier classification."""

from cdnresolve.constants import SpecifierKind
from cdnresolve.specifiers.classifier import classify, is_bare, is_relative, is_virtual_path


class TestClassify:
    """Tests for bare / relative / absolute classification."""

    def test_package_names_are_bare(self):
        """Package names, scoped names and scheme prefixes are bare."""
        for specifier in ("react", "@babel/core", "react@18/jsx-runtime", "esm:react", "#internal"):
            assert classify(specifier) is SpecifierKind.BARE
            assert is_bare(specifier)

    def test_full_urls_are_bare(self):
        """A fully-qualified URL is not a filesystem path."""
        assert is_bare("https://unpkg.com/react")

    def test_dot_prefixed_paths_are_relative(self):
        """./ and ../ prefixes are relative."""
        assert classify("./util") is SpecifierKind.RELATIVE
        assert classify("../lib/index.js") is SpecifierKind.RELATIVE
        assert is_relative("./util")

    def test_rooted_paths_are_absolute(self):
        """Posix and Windows roots are absolute."""
        assert classify("/node_modules/react/index.js") is SpecifierKind.ABSOLUTE
        assert classify("C:\\src\\index.ts") is SpecifierKind.ABSOLUTE
        assert not is_bare("/src/index.ts")


class TestVirtualPath:
    """Tests for the virtual root check."""

    def test_paths_under_root(self):
        """Only paths below the root segment count."""
        assert is_virtual_path("/node_modules/react/index.js", "/node_modules")
        assert is_virtual_path("/node_modules", "/node_modules/")
        assert not is_virtual_path("/node_modules_extra/x.js", "/node_modules")
        assert not is_virtual_path("/src/index.ts", "/node_modules")
