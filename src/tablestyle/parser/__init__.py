from tablestyle.errors import RuleSyntaxError
from tablestyle.parser.rules import (
    CATEGORIES,
    parse_plist,
    parse_rule_set,
    parse_rules,
    parse_snippets,
    parse_table_attributes,
)
from tablestyle.parser.transformer import read_forms

__all__ = [
    "CATEGORIES",
    "RuleSyntaxError",
    "parse_plist",
    "parse_rule_set",
    "parse_rules",
    "parse_snippets",
    "parse_table_attributes",
    "read_forms",
]
