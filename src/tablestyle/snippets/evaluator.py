"""Run computed snippets for one cell and accumulate their attributes."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from tablestyle.errors import SnippetEvaluationError

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[SnippetEvaluationError], None]


def evaluate_snippets(
    snippets: Iterable[Callable[[int, int, str], list[tuple[str, str]]]],
    row: int,
    column: int,
    text: str,
    *,
    strict: bool = False,
    on_error: ErrorHandler | None = None,
) -> list[tuple[str, str]]:
    """Invoke every snippet in order and concatenate their attribute pairs.

    A failing snippet contributes nothing for this cell; the failure is
    logged and passed to *on_error*.  With ``strict=True`` it is raised
    instead.
    """
    attributes: list[tuple[str, str]] = []
    for position, snippet in enumerate(snippets):
        try:
            result = snippet(row, column, text)
        except SnippetEvaluationError as exc:
            error = exc
        except Exception as exc:
            # Plain Python callables registered by the host.
            error = SnippetEvaluationError(
                f"{type(exc).__name__}: {exc}",
                index=getattr(snippet, "index", position),
                source=getattr(snippet, "source", repr(snippet)),
                row=row,
                column=column,
            )
            error.__cause__ = exc
        else:
            if result:
                attributes.extend(result)
            continue

        if strict:
            raise error
        logger.warning("Ignoring failed snippet: %s", error)
        if on_error is not None:
            on_error(error)
    return attributes
