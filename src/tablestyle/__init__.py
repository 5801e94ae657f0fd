"""tablestyle: rule-based conditional styling for table cells."""

from tablestyle.config import StylerConfig
from tablestyle.errors import RuleSyntaxError, SnippetEvaluationError, TableStyleError
from tablestyle.matching import is_applicable, rule_applies
from tablestyle.model import ANY, ResolvedStyle, Rule, RuleSet, TableAttributes
from tablestyle.parser import parse_rule_set, parse_rules
from tablestyle.resolver import resolve_style
from tablestyle.styler import RestyleReport, TableStyler, restyle_table

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "ResolvedStyle",
    "RestyleReport",
    "Rule",
    "RuleSet",
    "RuleSyntaxError",
    "SnippetEvaluationError",
    "StylerConfig",
    "TableAttributes",
    "TableStyleError",
    "TableStyler",
    "is_applicable",
    "parse_rule_set",
    "parse_rules",
    "resolve_style",
    "restyle_table",
    "rule_applies",
]
