"""Tests for package specifier parsing."""

import pytest

from cdnresolve.errors import MalformedSpecifier
from cdnresolve.specifiers.parser import parse_package_specifier


class TestParsePackageSpecifier:
    """Tests for name / version / subpath splitting."""

    def test_plain_name(self):
        """A bare name gets the latest version and no subpath."""
        parsed = parse_package_specifier("react")
        assert parsed.name == "react"
        assert parsed.version == "latest"
        assert parsed.subpath == ""
        assert parsed.has_explicit_version is False

    def test_version_and_subpath(self):
        """Version and subpath are split off the name."""
        parsed = parse_package_specifier("react@18.2.0/jsx-runtime")
        assert parsed.name == "react"
        assert parsed.version == "18.2.0"
        assert parsed.subpath == "/jsx-runtime"
        assert parsed.has_explicit_version is True
        assert parsed.to_path() == "react@18.2.0/jsx-runtime"

    def test_scoped_package(self):
        """The scope is part of the name."""
        parsed = parse_package_specifier("@babel/core@7.0.0/lib/index.js")
        assert parsed.name == "@babel/core"
        assert parsed.version == "7.0.0"
        assert parsed.subpath == "/lib/index.js"

        unversioned = parse_package_specifier("@scope/pkg")
        assert unversioned.name == "@scope/pkg"
        assert unversioned.version == "latest"

    def test_prerelease_and_range_versions(self):
        """Versions are kept verbatim."""
        assert parse_package_specifier("pkg@1.0.0-beta.1").version == "1.0.0-beta.1"
        assert parse_package_specifier("pkg@^2.1.0/sub").version == "^2.1.0"

    def test_directory_ignores_trailing_slash(self):
        """A trailing slash on the subpath is not part of the directory."""
        parsed = parse_package_specifier("pkg/hooks/")
        assert parsed.subpath == "/hooks/"
        assert parsed.directory == "/hooks"

    @pytest.mark.parametrize("specifier", ["", "@scope", "@/pkg", "@1.0.0", "@scope/@1.0.0"])
    def test_malformed_specifiers(self, specifier):
        """Specifiers without a package name are rejected."""
        with pytest.raises(MalformedSpecifier):
            parse_package_specifier(specifier)

    def test_malformed_is_value_error(self):
        """MalformedSpecifier can be caught as a ValueError."""
        with pytest.raises(ValueError):
            parse_package_specifier("")
