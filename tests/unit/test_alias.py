"""Unit tests for alias substitution."""

from modloader.resolution.alias import AliasMapper, parse_alias


class TestParseAlias:
    """Test first/last segment alias rules."""

    alias = {"a": "lib-a", "jquery": "jquery/1.8.3/jquery"}

    def test_first_segment(self):
        assert parse_alias("a/b", self.alias) == "lib-a/b"

    def test_last_segment(self):
        assert parse_alias("b/a", self.alias) == "b/lib-a"

    def test_first_segment_wins(self):
        """Only one substitution is made."""
        assert parse_alias("a/a", self.alias) == "lib-a/a"

    def test_single_segment(self):
        assert parse_alias("jquery", self.alias) == "jquery/1.8.3/jquery"

    def test_interior_segment_ignored(self):
        assert parse_alias("x/a/y", self.alias) == "x/a/y"

    def test_no_match(self):
        assert parse_alias("x/y", self.alias) == "x/y"

    def test_empty_table(self):
        assert parse_alias("a/b", {}) == "a/b"
        assert parse_alias("a/b", None) == "a/b"


class TestAliasMapper:
    """Test the alias mapper object."""

    def test_parse(self):
        mapper = AliasMapper({"ui": "widgets/ui"})
        assert mapper.parse("ui/button") == "widgets/ui/button"

    def test_default_table(self):
        assert AliasMapper().parse("ui/button") == "ui/button"
