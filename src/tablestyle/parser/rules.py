"""Build typed rule collections from raw per-category rule text.

Each rule is a positional tuple ``(content-pattern style-value column-filter
row-filter)``; trailing positions may be omitted::

    (("^x$" "red" nil nil)
     (t "yellow" (2 4))
     ("TODO" "orange" nil 3))

A category holds either a sequence of such tuples or one (optionally quoted)
list of them.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NoReturn

from tablestyle.errors import RuleSyntaxError
from tablestyle.model.rule import ANY, Rule, RuleSet, TableAttributes
from tablestyle.model.sexp import T, Keyword, Symbol, is_nil, to_source, unquote
from tablestyle.parser.transformer import read_forms
from tablestyle.snippets import ComputedSnippet, striped_snippet

__all__ = ["CATEGORIES", "parse_rule_set", "parse_rules", "parse_snippets", "parse_table_attributes"]

logger = logging.getLogger(__name__)

Fail = Callable[[str], NoReturn]

CATEGORIES = ("background", "foreground", "custom")


def _is_rule_tuple(form: object) -> bool:
    # A property list starts with a keyword; a rule tuple never does.
    return isinstance(form, list) and bool(form) and not isinstance(form[0], Keyword)


def _rule_forms(forms: list[object]) -> list[object]:
    """Flatten an outer list of tuples into a flat list of tuple forms."""
    result: list[object] = []
    for form in forms:
        form = unquote(form)
        if is_nil(form):
            continue
        entries = [unquote(item) for item in form] if isinstance(form, list) else []
        entries = [item for item in entries if not is_nil(item)]
        if entries and all(_is_rule_tuple(item) for item in entries):
            result.extend(entries)
        else:
            result.append(form)
    return result


def _parse_pattern(form: object, fail: Fail) -> object:
    form = unquote(form)
    if is_nil(form):
        return None
    if form == T:
        return ANY
    if isinstance(form, str):
        try:
            re.compile(form)
        except re.error as exc:
            fail(f"invalid regular expression {form!r}: {exc}")
        return form
    fail(f"content pattern must be a string, t or nil, got {to_source(form)}")


def _parse_index(value: object, fail: Fail) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        fail(f"row and column indices must be integers >= 1, got {to_source(value)}")
    return value


def _parse_filter(form: object, fail: Fail) -> object:
    form = unquote(form)
    if is_nil(form):
        return None
    if isinstance(form, list):
        return frozenset(_parse_index(item, fail) for item in form)
    return _parse_index(form, fail)


def _parse_color(form: object, fail: Fail) -> str:
    form = unquote(form)
    if isinstance(form, str):
        return form
    if isinstance(form, Symbol) and not is_nil(form):
        return form.name
    fail(f"color must be a string or symbol, got {to_source(form)}")


def _atom_text(value: object) -> str:
    if isinstance(value, list):
        return to_source(value)
    return str(value)


def parse_plist(form: object, fail: Fail) -> tuple[tuple[str, str], ...]:
    """Parse a ``(:key value ...)`` property list into attribute pairs."""
    form = unquote(form)
    if is_nil(form):
        return ()
    if not isinstance(form, list) or len(form) % 2:
        fail(f"attributes must be a property list (:key value ...), got {to_source(form)}")
    pairs: list[tuple[str, str]] = []
    for key, value in zip(form[::2], form[1::2]):
        if not isinstance(key, Keyword):
            fail(f"attribute key must be a :keyword, got {to_source(key)}")
        pairs.append((key.name, _atom_text(value)))
    return tuple(pairs)


def _parse_rule(form: object, category: str, fail: Fail) -> Rule:
    if not isinstance(form, list) or not 2 <= len(form) <= 4:
        fail(
            "rule must be a list (pattern style [columns [rows]]), "
            f"got {to_source(form)}"
        )
    padded = list(form) + [None] * (4 - len(form))
    pattern, style, columns, rows = padded
    if category == "custom":
        style_value: object = parse_plist(style, fail)
    else:
        style_value = _parse_color(style, fail)
    return Rule(
        content_pattern=_parse_pattern(pattern, fail),
        style_value=style_value,  # type: ignore[arg-type]
        column_filter=_parse_filter(columns, fail),
        row_filter=_parse_filter(rows, fail),
    )


def parse_rules(source: str, category: str) -> tuple[Rule, ...]:
    """Parse the raw rule text of one category into an ordered rule collection.

    Raises RuleSyntaxError if any rule is malformed; no partial result is
    returned.
    """
    if category not in CATEGORIES:
        raise ValueError(f"Unknown rule category: {category!r}")
    if not source or not source.strip():
        return ()

    def fail(message: str) -> NoReturn:
        raise RuleSyntaxError(message, category=category, source=source)

    rules = tuple(
        _parse_rule(form, category, fail) for form in _rule_forms(read_forms(source, category))
    )
    logger.debug("Parsed %d %s rule(s)", len(rules), category)
    return rules


def parse_snippets(source: str) -> list[ComputedSnippet]:
    """Parse zero or more snippet bodies; each top-level form is one snippet."""
    if not source or not source.strip():
        return []
    forms = read_forms(source, "computed")
    return [ComputedSnippet(form, index=i) for i, form in enumerate(forms)]


def parse_rule_set(
    background: str = "",
    foreground: str = "",
    custom: str = "",
    computed: str = "",
    striped: bool = False,
    *,
    stripe_color: str = "gray90",
) -> RuleSet:
    """Parse the raw attributes of one table into a RuleSet.

    The striping snippet, when enabled, runs before user snippets.
    """
    snippets: list = []
    if striped:
        snippets.append(striped_snippet(stripe_color))
    snippets.extend(parse_snippets(computed))
    return RuleSet(
        background=parse_rules(background, "background"),
        foreground=parse_rules(foreground, "foreground"),
        custom=parse_rules(custom, "custom"),
        snippets=tuple(snippets),
    )


def parse_table_attributes(attributes: TableAttributes, *, stripe_color: str = "gray90") -> RuleSet:
    """Parse declared table attributes into a RuleSet."""
    return parse_rule_set(
        attributes.background,
        attributes.foreground,
        attributes.custom,
        attributes.computed,
        attributes.striped,
        stripe_color=stripe_color,
    )
