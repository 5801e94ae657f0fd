"""Style resolution for a single cell.

Precedence, in order of application:
    1. computed snippets (all, in declaration order)
    2. first matching background rule
    3. first matching foreground rule
    4. every matching custom rule, in order

Later steps overwrite earlier ones when they write the same key.
"""

from __future__ import annotations

from typing import Iterable

from tablestyle.matching import rule_applies
from tablestyle.model.rule import Rule, RuleSet
from tablestyle.model.style import BACKGROUND, FOREGROUND, ResolvedStyle
from tablestyle.snippets import evaluate_snippets
from tablestyle.snippets.evaluator import ErrorHandler

__all__ = ["first_match", "resolve_style"]


def first_match(rules: Iterable[Rule], row: int, column: int, text: str) -> Rule | None:
    """Return the first rule in *rules* that applies to the cell, if any."""
    for rule in rules:
        if rule_applies(rule, row, column, text):
            return rule
    return None


def resolve_style(
    row: int,
    column: int,
    text: str,
    rule_set: RuleSet,
    *,
    strict: bool = False,
    on_error: ErrorHandler | None = None,
) -> ResolvedStyle:
    """Combine every applicable rule and snippet into the cell's style."""
    style = ResolvedStyle()
    style.extend(
        evaluate_snippets(
            rule_set.snippets, row, column, text, strict=strict, on_error=on_error
        )
    )

    background = first_match(rule_set.background, row, column, text)
    if background is not None:
        style.set(BACKGROUND, background.style_value)  # type: ignore[arg-type]

    foreground = first_match(rule_set.foreground, row, column, text)
    if foreground is not None:
        style.set(FOREGROUND, foreground.style_value)  # type: ignore[arg-type]

    for rule in rule_set.custom:
        if rule_applies(rule, row, column, text):
            style.extend(rule.style_value)  # type: ignore[arg-type]

    return style
