"""Tests for rule matching."""

import pytest

from tablestyle.matching import content_matches, index_matches, is_applicable, rule_applies
from tablestyle.model import ANY, Rule


# ---------------------------------------------------------------------------
# Index filters
# ---------------------------------------------------------------------------


class TestIndexFilter:
    @pytest.mark.parametrize("index", [1, 2, 3, 100])
    def test_absent_filter_matches_every_index(self, index):
        assert index_matches(index, None) is True

    def test_single_index(self):
        assert index_matches(2, 2) is True
        assert index_matches(3, 2) is False

    def test_index_set_is_inclusion_only(self):
        columns = frozenset({2, 4})
        assert index_matches(2, columns) is True
        assert index_matches(4, columns) is True
        assert index_matches(3, columns) is False
        assert index_matches(1, columns) is False


# ---------------------------------------------------------------------------
# Content patterns
# ---------------------------------------------------------------------------


class TestContentPattern:
    def test_absent_pattern_matches_only_empty_text(self):
        assert content_matches("", None) is True
        assert content_matches("x", None) is False

    def test_any_marker_matches_only_non_empty_text(self):
        assert content_matches("x", ANY) is True
        assert content_matches(" ", ANY) is True
        assert content_matches("", ANY) is False

    def test_regexp_searches_within_text(self):
        assert content_matches("total: 42", r"\d+") is True
        assert content_matches("none", r"\d+") is False

    def test_anchored_regexp(self):
        assert content_matches("x", "^x$") is True
        assert content_matches("xx", "^x$") is False

    def test_regexp_against_empty_text(self):
        assert content_matches("", "^$") is True
        assert content_matches("", "x") is False


# ---------------------------------------------------------------------------
# Combined
# ---------------------------------------------------------------------------


class TestIsApplicable:
    def test_all_tests_pass(self):
        assert is_applicable(2, 2, 3, frozenset({3}), "abc", "b") is True

    def test_column_mismatch(self):
        assert is_applicable(2, None, 3, frozenset({2, 4}), "abc", ANY) is False

    def test_row_mismatch(self):
        assert is_applicable(1, 2, 1, None, "abc", ANY) is False

    def test_content_mismatch(self):
        assert is_applicable(1, None, 1, None, "", ANY) is False


class TestRuleApplies:
    def test_rule_without_filters_applies_to_every_row(self):
        rule = Rule(content_pattern=ANY, style_value="red")
        assert all(rule_applies(rule, row, 1, "x") for row in range(1, 20))

    def test_rule_uses_its_filters(self):
        rule = Rule(content_pattern="^x$", style_value="red", column_filter=2, row_filter=frozenset({1, 3}))
        assert rule_applies(rule, 1, 2, "x") is True
        assert rule_applies(rule, 3, 2, "x") is True
        assert rule_applies(rule, 2, 2, "x") is False
        assert rule_applies(rule, 1, 1, "x") is False
        assert rule_applies(rule, 1, 2, "y") is False

    def test_matching_does_not_mutate_rule(self):
        rule = Rule(content_pattern="a+", style_value="red", column_filter=frozenset({1}))
        before = (rule.content_pattern, rule.column_filter, rule.row_filter)
        rule_applies(rule, 1, 1, "aaa")
        assert (rule.content_pattern, rule.column_filter, rule.row_filter) == before
