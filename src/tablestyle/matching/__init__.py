"""Rule matching: decides whether a rule applies to a cell.

A rule applies when its column filter, row filter and content pattern all
accept the cell:

    filter  = nil | index | {index, ...}     -- inclusion test only
    pattern = nil  -> text is empty
            | t    -> text is non-empty
            | re   -> re.search(re, text)
"""

from __future__ import annotations

import re

from tablestyle.model.rule import ANY, ContentPattern, IndexFilter, Rule

__all__ = ["content_matches", "index_matches", "is_applicable", "rule_applies"]


def index_matches(index: int, index_filter: IndexFilter) -> bool:
    """Return True if *index* passes *index_filter* (None passes everything)."""
    if index_filter is None:
        return True
    if isinstance(index_filter, int):
        return index == index_filter
    return index in index_filter


def content_matches(text: str, pattern: ContentPattern) -> bool:
    """Test cell *text* against a content pattern."""
    if pattern is None:
        return text == ""
    if pattern is ANY:
        return text != ""
    return re.search(pattern, text) is not None


def is_applicable(
    row: int,
    row_filter: IndexFilter,
    column: int,
    column_filter: IndexFilter,
    text: str,
    content_pattern: ContentPattern,
) -> bool:
    """Return True if the column, row and content tests all pass."""
    return (
        index_matches(column, column_filter)
        and index_matches(row, row_filter)
        and content_matches(text, content_pattern)
    )


def rule_applies(rule: Rule, row: int, column: int, text: str) -> bool:
    """Return True if *rule* applies to the cell at (row, column)."""
    return is_applicable(
        row, rule.row_filter, column, rule.column_filter, text, rule.content_pattern
    )
