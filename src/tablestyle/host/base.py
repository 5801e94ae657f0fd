"""Protocols the host document provides to the styling engine."""

from __future__ import annotations

from typing import Protocol


class GridAccessor(Protocol):
    """Read access to a table's data cells.

    Rows and columns are 1-based and count data rows only; header and
    separator lines are not numbered.
    """

    def row_count(self) -> int: ...

    def column_count(self) -> int: ...

    def cell_text(self, row: int, column: int) -> str: ...

    def cell_span(self, row: int, column: int) -> tuple[int, int] | None:
        """Character offsets ``(start, end)`` of a cell, or None if not found."""
        ...


class AttributeSink(Protocol):
    """Storage for tagged visual markers over character spans."""

    def clear_markers(self, tag: str) -> None: ...

    def publish_marker(
        self, start: int, end: int, tag: str, attributes: tuple[tuple[str, str], ...]
    ) -> None: ...
