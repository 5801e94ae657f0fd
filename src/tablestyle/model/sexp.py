"""Datum types produced by the s-expression reader."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Symbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Keyword:
    """A ``:name`` keyword; ``name`` excludes the leading colon."""

    name: str

    def __str__(self) -> str:
        return f":{self.name}"


NIL = Symbol("nil")
T = Symbol("t")
QUOTE = Symbol("quote")


def is_nil(form: object) -> bool:
    """True for ``nil``, the empty list and a missing position."""
    return form is None or form == NIL or (isinstance(form, list) and not form)


def unquote(form: object) -> object:
    """Strip a leading ``'`` (``(quote x)``) from *form*."""
    while isinstance(form, list) and len(form) == 2 and form[0] == QUOTE:
        form = form[1]
    return form


def to_source(form: object) -> str:
    """Render a datum back to s-expression text."""
    if isinstance(form, list):
        if len(form) == 2 and form[0] == QUOTE:
            return "'" + to_source(form[1])
        return "(" + " ".join(to_source(f) for f in form) + ")"
    if form is None:
        return "nil"
    if form is True:
        return "t"
    if isinstance(form, str):
        escaped = form.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(form)
