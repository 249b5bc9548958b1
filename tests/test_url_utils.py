"""Tests for URL and virtual path helpers."""

from cdnresolve.common.url_utils import encode_whitespace, normalize_path, strip_version_segment, url_join


class TestUrlJoin:
    """Tests for posix-style URL joining."""

    def test_absolute_parts_do_not_reset_path(self):
        """Leading slashes on parts are joined, not treated as roots."""
        assert url_join("https://unpkg.com/", "react@18", "/index.js") == "https://unpkg.com/react@18/index.js"

    def test_base_path_is_kept(self):
        """The origin's own base path survives the join."""
        assert url_join("https://cdn.jsdelivr.net/npm/", "lodash@4/package.json") == (
            "https://cdn.jsdelivr.net/npm/lodash@4/package.json"
        )

    def test_dot_segments_and_empty_parts(self):
        """Dot segments collapse and empty parts are skipped."""
        assert url_join("https://unpkg.com/pkg@1.0.0/", "./src/../lib/a.js", "") == "https://unpkg.com/pkg@1.0.0/lib/a.js"

    def test_whitespace_is_encoded(self):
        """Spaces in paths are percent-encoded."""
        assert url_join("https://unpkg.com/", "pkg/my file.js") == "https://unpkg.com/pkg/my%20file.js"

    def test_percent_and_backslash_are_escaped(self):
        """Literal % and backslashes in parts cannot form escapes."""
        assert url_join("https://unpkg.com/", "pkg@1.0.0/100%.js") == "https://unpkg.com/pkg@1.0.0/100%25.js"
        assert url_join("https://unpkg.com/", "pkg\\a.js") == "https://unpkg.com/pkg%5Ca.js"

    def test_base_escapes_are_kept(self):
        """Escapes already in the base URL are not encoded twice."""
        assert url_join("https://unpkg.com/pkg@%5E1.0.0/", "a.js") == "https://unpkg.com/pkg@%5E1.0.0/a.js"


class TestPathHelpers:
    """Tests for path normalization helpers."""

    def test_encode_whitespace(self):
        """Only whitespace is touched."""
        assert encode_whitespace("a b\tc") == "a%20b%09c"
        assert encode_whitespace("a@b/c") == "a@b/c"

    def test_normalize_path(self):
        """Duplicate slashes and dot segments go; a trailing slash stays."""
        assert normalize_path("/a//b/../c/") == "/a/c/"
        assert normalize_path("/node_modules/./pkg") == "/node_modules/pkg"
        assert normalize_path("") == "/"

    def test_strip_version_segment(self):
        """The first versioned segment loses its version."""
        assert strip_version_segment("/react@18.2.0/index.js") == "/react/index.js"
        assert strip_version_segment("/@babel/core@7.0.0/lib/index.js") == "/@babel/core/lib/index.js"
        assert strip_version_segment("/npm/lodash@4/debounce.js") == "/npm/lodash/debounce.js"
        assert strip_version_segment("/std/path/mod.ts") == "/std/path/mod.ts"
