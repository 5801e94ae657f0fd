"""Diagnostic model: structured findings reported by checks and restyles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a table's styling rules.

    Attributes:
        rule: Identifier of the check or stage that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        category: The attribute category involved (``background``, ``computed``...).
        cell: The (row, column) pair involved, if applicable.
    """

    rule: str
    severity: Severity
    message: str
    category: str | None = None
    cell: tuple[int, int] | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        location = ""
        if self.cell:
            location = f" [cell={self.cell[0]},{self.cell[1]}]"
        elif self.category:
            location = f" [{self.category}]"
        return f"{self.severity.value}{location}: {self.message}"
