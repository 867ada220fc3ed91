"""
Unit tests for map rules.

Map rules rewrite resolved locations in declaration order, with rules
marked -1 applied in a second pass.
"""

import re

import pytest

from modloader.errors import InvalidMapRule
from modloader.rules.engine import DEFERRED_ORDER, MapRewriter, MapRule, parse_map


class TestParseMap:
    """Test rule application order."""

    def test_literal_rule(self):
        assert parse_map("http://x/a.js", [[".js", "-debug.js"]]) == "http://x/a-debug.js"

    def test_rules_compose_in_order(self):
        """Each rule sees the output of the previous one."""
        assert parse_map("a", [["a", "b"], ["b", "c"]]) == "c"

    def test_deferred_rules_run_last(self):
        rules = [["x", "y", DEFERRED_ORDER], ["y", "z"]]
        # In declaration order this would end as 'z'
        assert parse_map("x", rules) == "y"

    def test_deferred_rules_see_first_pass_output(self):
        rules = [["v1", "v2", -1], ["a", "v1"]]
        assert parse_map("a", rules) == "v2"

    def test_other_order_markers_are_not_deferred(self):
        rules = [["x", "y", 5], ["y", "z"]]
        assert parse_map("x", rules) == "z"

    def test_empty_and_short_rules_skipped(self):
        assert parse_map("a", [None, ["a"], [], ["a", "b"]]) == "b"

    def test_no_rules(self):
        assert parse_map("http://x/a.js", []) == "http://x/a.js"

    def test_literal_replaces_first_occurrence(self):
        assert parse_map("a-a", [["a", "b"]]) == "b-a"


class TestMapRule:
    """Test rule construction and regex rules."""

    def test_regex_rule_with_groups(self):
        rule = MapRule(pattern=r"/(\w+)\.js$", replacement=r"/\1.min.js", regex=True)
        assert rule.apply("http://x/app.js") == "http://x/app.min.js"

    def test_compiled_pattern_in_list(self):
        rules = [[re.compile(r"^http:"), "https:"]]
        assert parse_map("http://x/a.js", rules) == "https://x/a.js"

    def test_callable_replacement(self):
        rule = MapRule(
            pattern=re.compile(r"/v(\d+)/"),
            replacement=lambda m: f"/v{int(m.group(1)) + 1}/"
        )
        assert rule.apply("http://x/v1/a.js") == "http://x/v2/a.js"

    def test_count_zero_replaces_all(self):
        assert MapRule(pattern="a", replacement="b", count=0).apply("a-a") == "b-b"

    def test_from_dict(self):
        rule = MapRule.from_config({"pattern": "a", "replacement": "b", "last": True})
        assert rule.deferred
        assert not rule.regex

    def test_from_dict_regex(self):
        rule = MapRule.from_config({"pattern": r"(\d+)", "replacement": r"<\1>", "regex": True})
        assert rule.apply("a1b22") == "a<1>b22"

    def test_from_dict_missing_replacement(self):
        with pytest.raises(InvalidMapRule):
            MapRule.from_config({"pattern": "a"})

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidMapRule):
            MapRule.from_config({"pattern": "a", "replacement": "b", "flags": "i"})

    def test_short_sequence_rejected(self):
        with pytest.raises(InvalidMapRule):
            MapRule.from_config(["a"])

    def test_callable_needs_regex(self):
        with pytest.raises(InvalidMapRule):
            MapRule(pattern="a", replacement=lambda m: "b")


class TestMapRewriter:
    """Test the rewriter object."""

    def test_apply_and_stats(self):
        rewriter = MapRewriter([["a", "b"], ["c", "d", -1]])
        rewriter.add_rule({"pattern": "x+", "replacement": "y", "regex": True})

        assert rewriter.apply("acxx") == "bdy"
        assert rewriter.get_stats() == {"total_rules": 3, "deferred_rules": 1, "regex_rules": 1}

    def test_load_rules_from_yaml(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(
            "map:\n"
            "  - ['.js', '.js?v=2']\n"
            "  - {pattern: 'cdn.a', replacement: 'cdn.b', last: true}\n"
        )
        rewriter = MapRewriter()
        rewriter.load_rules_from_yaml(rules_file)

        assert rewriter.apply("http://cdn.a/x.js") == "http://cdn.b/x.js?v=2"
