from tablestyle.model.diagnostic import Diagnostic, Severity
from tablestyle.model.rule import (
    ANY,
    ContentMatch,
    Rule,
    RuleSet,
    TableAttributes,
)
from tablestyle.model.style import BACKGROUND, FOREGROUND, ResolvedStyle

__all__ = [
    "ANY",
    "BACKGROUND",
    "FOREGROUND",
    "ContentMatch",
    "Diagnostic",
    "ResolvedStyle",
    "Rule",
    "RuleSet",
    "Severity",
    "TableAttributes",
]
