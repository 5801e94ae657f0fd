"""In-memory host: a pipe-table grid and a marker store.

The grid renders its cells as text so that every cell has a real character
span::

    | Name  | Qty |
    |-------+-----|
    | apple | 3   |
    | pear  |     |

Rows shorter than the table are rendered as-is until :meth:`realign` pads
them; their missing cells have no span.
"""

from __future__ import annotations

from dataclasses import dataclass

from tablestyle.events.bus import EventBus
from tablestyle.events.types import (
    ColumnDeleted,
    ColumnInserted,
    RowDeleted,
    RowInserted,
    TableRealigned,
)


class InMemoryGrid:
    """A table of text cells held in Python lists."""

    def __init__(
        self,
        rows: list[list[str]] | None = None,
        header: list[str] | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self._rows: list[list[str]] = [list(r) for r in rows or []]
        self._header: list[str] | None = list(header) if header is not None else None
        self.bus = bus or EventBus()
        self._text: str | None = None
        self._layout: tuple[list[int], list[int]] | None = None

    # --- grid accessor --------------------------------------------------------

    def row_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        widths = [len(r) for r in self._rows]
        if self._header is not None:
            widths.append(len(self._header))
        return max(widths, default=0)

    def cell_text(self, row: int, column: int) -> str:
        self._check_row(row)
        cells = self._rows[row - 1]
        if 1 <= column <= len(cells):
            return cells[column - 1]
        return ""

    def cell_span(self, row: int, column: int) -> tuple[int, int] | None:
        if not 1 <= row <= len(self._rows):
            return None
        if not 1 <= column <= len(self._rows[row - 1]):
            return None
        column_starts, line_offsets = self._cell_layout()
        start = line_offsets[row - 1] + column_starts[column - 1]
        return start, start + column_starts[column] - column_starts[column - 1] - 3

    # --- rendering ------------------------------------------------------------

    @property
    def text(self) -> str:
        """The table rendered as pipe-table text."""
        if self._text is None:
            self._text = "".join(line + "\n" for line in self._lines())
        return self._text

    def _widths(self) -> list[int]:
        widths = [1] * self.column_count()
        all_rows = self._rows + ([self._header] if self._header is not None else [])
        for cells in all_rows:
            for i, cell in enumerate(cells):
                widths[i] = max(widths[i], len(cell))
        return widths

    def _format_row(self, cells: list[str], widths: list[int]) -> str:
        fields = [cell.ljust(widths[i]) for i, cell in enumerate(cells)]
        return "| " + " | ".join(fields) + " |"

    def _lines(self) -> list[str]:
        widths = self._widths()
        lines: list[str] = []
        if self._header is not None:
            lines.append(self._format_row(self._header, widths))
            lines.append("|" + "+".join("-" * (w + 2) for w in widths) + "|")
        lines.extend(self._format_row(cells, widths) for cells in self._rows)
        return lines

    def _line_offsets(self) -> list[int]:
        """Start offsets of the data row lines."""
        offsets: list[int] = []
        position = 0
        skip = 2 if self._header is not None else 0
        for i, line in enumerate(self._lines()):
            if i >= skip:
                offsets.append(position)
            position += len(line) + 1
        return offsets

    def _cell_layout(self) -> tuple[list[int], list[int]]:
        """Cached column start offsets within a line, and data line offsets."""
        if self._layout is None:
            column_starts = [2]
            for width in self._widths():
                column_starts.append(column_starts[-1] + width + 3)
            self._layout = (column_starts, self._line_offsets())
        return self._layout

    def _invalidate(self) -> None:
        self._text = None
        self._layout = None

    def _check_row(self, row: int) -> None:
        if not 1 <= row <= len(self._rows):
            raise IndexError(f"row {row} out of range 1..{len(self._rows)}")

    def _changed(self, event: object) -> None:
        self._invalidate()
        self.bus.emit(event)

    # --- edits ----------------------------------------------------------------

    def set_cell(self, row: int, column: int, text: str) -> None:
        """Replace a cell's text; no restyle is triggered until realignment."""
        self._check_row(row)
        cells = self._rows[row - 1]
        while len(cells) < column:
            cells.append("")
        cells[column - 1] = text
        self._invalidate()

    def insert_row(self, row: int, cells: list[str] | None = None) -> None:
        """Insert a row so that it becomes row number *row*."""
        if not 1 <= row <= len(self._rows) + 1:
            raise IndexError(f"cannot insert row at {row}")
        new_cells = list(cells) if cells is not None else [""] * self.column_count()
        self._rows.insert(row - 1, new_cells)
        self._changed(RowInserted(row))

    def delete_row(self, row: int) -> None:
        self._check_row(row)
        del self._rows[row - 1]
        self._changed(RowDeleted(row))

    def insert_column(self, column: int, values: list[str] | None = None) -> None:
        """Insert a column so that it becomes column number *column*."""
        if not 1 <= column <= self.column_count() + 1:
            raise IndexError(f"cannot insert column at {column}")
        for i, cells in enumerate(self._rows):
            value = values[i] if values is not None and i < len(values) else ""
            if len(cells) >= column - 1:
                cells.insert(column - 1, value)
        if self._header is not None and len(self._header) >= column - 1:
            self._header.insert(column - 1, "")
        self._changed(ColumnInserted(column))

    def delete_column(self, column: int) -> None:
        if not 1 <= column <= self.column_count():
            raise IndexError(f"column {column} out of range 1..{self.column_count()}")
        for cells in self._rows:
            if column <= len(cells):
                del cells[column - 1]
        if self._header is not None and column <= len(self._header):
            del self._header[column - 1]
        self._changed(ColumnDeleted(column))

    def realign(self) -> None:
        """Pad short rows so every row has a cell in every column."""
        width = self.column_count()
        for cells in self._rows:
            cells.extend([""] * (width - len(cells)))
        if self._header is not None:
            self._header.extend([""] * (width - len(self._header)))
        self._changed(TableRealigned())


@dataclass(frozen=True)
class Marker:
    """A tagged visual annotation over ``text[start:end]``."""

    start: int
    end: int
    tag: str
    attributes: tuple[tuple[str, str], ...]

    @property
    def style(self) -> dict[str, str]:
        return dict(self.attributes)


class MarkerStore:
    """Attribute sink keeping markers in a list, cleared by tag."""

    def __init__(self) -> None:
        self._markers: list[Marker] = []

    def clear_markers(self, tag: str) -> None:
        self._markers = [m for m in self._markers if m.tag != tag]

    def publish_marker(
        self, start: int, end: int, tag: str, attributes: tuple[tuple[str, str], ...]
    ) -> None:
        self._markers.append(Marker(start, end, tag, tuple(attributes)))

    def markers(self, tag: str | None = None) -> list[Marker]:
        """Markers ordered by position, optionally only those with *tag*."""
        selected = [m for m in self._markers if tag is None or m.tag == tag]
        return sorted(selected, key=lambda m: (m.start, m.end))

    def at(self, offset: int) -> list[Marker]:
        """Markers covering character *offset*."""
        return [m for m in self.markers() if m.start <= offset < m.end]

    def __len__(self) -> int:
        return len(self._markers)
