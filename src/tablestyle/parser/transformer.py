"""Lark Transformer that converts an s-expression parse tree into data."""

from __future__ import annotations

import re
from pathlib import Path

from lark import Lark, Token, Transformer, Tree
from lark.exceptions import LarkError

from tablestyle.errors import RuleSyntaxError
from tablestyle.model.sexp import QUOTE, Keyword, Symbol

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

MAX_DEPTH = 64

_NUMBER = re.compile(r"[-+]?\d+(\.\d+)?")

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}

_parser: Lark | None = None


def _get_parser() -> Lark:
    global _parser
    if _parser is None:
        _parser = Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")
    return _parser


def _unescape(body: str) -> str:
    # Unknown escapes keep their backslash so regexps like "\d" survive.
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class SexpTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into lists, strings, numbers and symbols."""

    def string(self, items: list[Token]) -> str:
        return _unescape(str(items[0])[1:-1])

    def atom(self, items: list[Token]) -> object:
        raw = str(items[0])
        if raw.startswith(":") and len(raw) > 1:
            return Keyword(raw[1:])
        match = _NUMBER.fullmatch(raw)
        if match:
            return float(raw) if match.group(1) else int(raw)
        return Symbol(raw)

    def seq(self, items: list[object]) -> list[object]:
        return list(items)

    def quoted(self, items: list[object]) -> list[object]:
        return [QUOTE, items[0]]

    def start(self, items: list[object]) -> list[object]:
        return list(items)


def _nesting_depth(tree: Tree) -> int:
    depth = 0
    stack = [(tree, 0)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in node.children if isinstance(child, Tree))
    return depth


def read_forms(source: str, category: str = "") -> list[object]:
    """Read every top-level form in *source*.

    Raises RuleSyntaxError with line/column information on malformed input,
    and when lists or quotes nest deeper than MAX_DEPTH.
    """
    try:
        tree = _get_parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise RuleSyntaxError(
            f"malformed expression: {e}",
            category=category,
            source=source,
            line=line,
            column=column,
        ) from e
    if _nesting_depth(tree) > MAX_DEPTH:
        raise RuleSyntaxError(
            f"expression nested deeper than {MAX_DEPTH} levels",
            category=category,
            source=source,
        )
    return SexpTransformer().transform(tree)
