"""Exception types raised by the styling engine."""

from __future__ import annotations


class TableStyleError(Exception):
    """Base class for all tablestyle errors."""


class RuleSyntaxError(TableStyleError):
    """Raised when a declared rule list or snippet list cannot be parsed.

    Fatal for the restyle in progress: no markers are published.
    """

    def __init__(
        self,
        message: str,
        category: str = "",
        source: str = "",
        line: int | None = None,
        column: int | None = None,
    ):
        self.category = category
        self.source = source
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        where = self.category or "rules"
        if self.line is not None:
            return f"{where} (line {self.line}, column {self.column}): {message}"
        return f"{where}: {message}"


class SnippetEvaluationError(TableStyleError):
    """Raised when a computed snippet fails for a specific cell."""

    def __init__(
        self,
        message: str,
        index: int = 0,
        source: str = "",
        row: int | None = None,
        column: int | None = None,
    ):
        self.index = index
        self.source = source
        self.row = row
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.row is not None:
            return f"snippet #{self.index} at row {self.row}, column {self.column}: {message}"
        return f"snippet #{self.index}: {message}"
