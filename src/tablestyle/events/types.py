"""Event types for table edits and restyle passes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RowInserted:
    row: int


@dataclass(frozen=True)
class RowDeleted:
    row: int


@dataclass(frozen=True)
class ColumnInserted:
    column: int


@dataclass(frozen=True)
class ColumnDeleted:
    column: int


@dataclass(frozen=True)
class TableRealigned:
    pass


@dataclass(frozen=True)
class RestyleCompleted:
    tag: str
    markers: int
    skipped: int


@dataclass(frozen=True)
class RestyleFailed:
    tag: str
    error: str


@dataclass(frozen=True)
class SnippetFailed:
    index: int
    row: int
    column: int
    error: str


# Structural edits after which the whole table is restyled.
STRUCTURAL_EDITS = (RowInserted, RowDeleted, ColumnInserted, ColumnDeleted, TableRealigned)
