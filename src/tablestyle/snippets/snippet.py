"""Computed snippets: callables producing attributes for one cell."""

from __future__ import annotations

from typing import Any

from tablestyle.errors import SnippetEvaluationError
from tablestyle.model.sexp import Keyword, Symbol, to_source
from tablestyle.model.style import BACKGROUND
from tablestyle.snippets.interpreter import EvaluationError, evaluate, truthy


def _value_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (Symbol, Keyword)):
        return str(value)
    return to_source(value)


def to_attributes(value: Any) -> list[tuple[str, str]]:
    """Convert a snippet result into attribute pairs.

    ``nil`` yields no attributes; anything else must be a property list.
    """
    if not truthy(value):
        return []
    if not isinstance(value, list) or len(value) % 2:
        raise EvaluationError(
            f"snippet must return nil or a property list, got {to_source(value)}"
        )
    pairs: list[tuple[str, str]] = []
    for key, item in zip(value[::2], value[1::2]):
        if not isinstance(key, Keyword):
            raise EvaluationError(f"attribute key must be a :keyword, got {to_source(key)}")
        pairs.append((key.name, _value_text(item)))
    return pairs


class ComputedSnippet:
    """A user-declared snippet, called with ``(row, column, text)``."""

    def __init__(self, form: Any, index: int = 0) -> None:
        self.form = form
        self.index = index
        self.source = to_source(form)

    def __call__(self, row: int, column: int, text: str) -> list[tuple[str, str]]:
        env = {"row": row, "column": column, "text": text}
        try:
            return to_attributes(evaluate(self.form, env))
        except EvaluationError as exc:
            raise SnippetEvaluationError(
                str(exc), index=self.index, source=self.source, row=row, column=column
            ) from exc

    def __repr__(self) -> str:
        return f"ComputedSnippet({self.source!r}, index={self.index})"


class StripedSnippet:
    """Adds a background color to even rows."""

    index = -1
    source = "<striped>"

    def __init__(self, color: str) -> None:
        self.color = color

    def __call__(self, row: int, column: int, text: str) -> list[tuple[str, str]]:
        if row % 2 == 0:
            return [(BACKGROUND, self.color)]
        return []

    def __repr__(self) -> str:
        return f"StripedSnippet({self.color!r})"


def striped_snippet(color: str = "gray90") -> StripedSnippet:
    return StripedSnippet(color)
