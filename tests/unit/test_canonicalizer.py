"""
Unit tests for path canonicalization.

Covers dirname, realpath, extension normalization, host extraction and
absolute id detection.
"""

import pytest

from modloader.errors import InvalidPath
from modloader.resolution.canonicalizer import (
    PathCanonicalizer, dirname, realpath, normalize, get_host,
    normalize_pathname, is_absolute_path
)


class TestDirname:
    """Test directory extraction."""

    def test_nested_path(self):
        assert dirname("a/b/c.js") == "a/b/"

    def test_no_directory(self):
        assert dirname("d.js") == "./"

    def test_url(self):
        assert dirname("http://example.com/app/index.html") == "http://example.com/app/"

    def test_trailing_slash_is_kept(self):
        assert dirname("http://example.com/app/") == "http://example.com/app/"


class TestRealpath:
    """Test path canonicalization."""

    def test_dots_and_duplicate_slashes(self):
        assert realpath("./a//b/../c") == "a/c"

    def test_escaping_root_raises(self):
        with pytest.raises(InvalidPath) as exc_info:
            realpath("a/../../x")
        assert exc_info.value.path == "a/../../x"

    def test_scheme_slashes_survive(self):
        """Slashes right after 'scheme:' are not collapsed."""
        assert realpath("a://b//c") == "a://b/c"
        assert realpath("http://a//b/c") == "http://a/b/c"
        assert realpath("file:///a//b/c") == "file:///a/b/c"

    def test_path_without_dots_is_untouched(self):
        assert realpath("http://example.com/a/b") == "http://example.com/a/b"

    def test_url_with_parent_segments(self):
        assert realpath("http://example.com/app/../lib/./x.js") == "http://example.com/lib/x.js"

    def test_protocol_relative_prefix(self):
        assert realpath("//cdn/x/../y") == "//cdn/y"


class TestNormalize:
    """Test the default extension rules."""

    def test_hash_suppresses_extension(self):
        assert normalize("http://x/y#") == "http://x/y"

    def test_js_extension_added(self):
        assert normalize("http://x/y") == "http://x/y.js"

    def test_css_kept(self):
        assert normalize("http://x/y.css") == "http://x/y.css"

    def test_js_kept(self):
        assert normalize("http://x/y.js") == "http://x/y.js"

    def test_query_kept(self):
        assert normalize("http://x/y?v=1") == "http://x/y?v=1"

    def test_idempotent(self):
        once = normalize("http://x/a/../b//c")
        assert once == "http://x/b/c.js"
        assert normalize(once) == once

    def test_invalid_path_propagates(self):
        with pytest.raises(InvalidPath):
            normalize("../x")


class TestHostAndPathname:
    """Test host extraction and pathname normalization."""

    def test_get_host(self):
        assert get_host("http://example.com:8080/a/b.js") == "http://example.com:8080"

    def test_get_host_without_path(self):
        assert get_host("https://example.com") == "https://example.com"

    def test_get_host_without_scheme(self):
        assert get_host("a/b/c.js") == "a/b/c.js"

    def test_normalize_pathname(self):
        assert normalize_pathname("app/index.html") == "/app/index.html"
        assert normalize_pathname("/app/index.html") == "/app/index.html"


class TestIsAbsolutePath:
    """Test absolute id detection."""

    @pytest.mark.parametrize("id", ["http://a/b", "file:///a", "//cdn/x", "x?u=http://a"])
    def test_absolute(self, id):
        assert is_absolute_path(id)

    @pytest.mark.parametrize("id", ["/a/b", "./a", "../a", "a/b"])
    def test_not_absolute(self, id):
        assert not is_absolute_path(id)


class TestPathCanonicalizer:
    """Test the canonicalizer facade used by the resolver."""

    def test_canonicalize_keeps_extension(self):
        canonicalizer = PathCanonicalizer()
        assert canonicalizer.canonicalize("a/./b") == "a/b"
        assert canonicalizer.normalize("a/./b") == "a/b.js"
