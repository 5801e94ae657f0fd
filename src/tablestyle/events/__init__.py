"""Event system: bus and event types for table edits and restyles."""

from tablestyle.events.bus import EventBus
from tablestyle.events.types import (
    STRUCTURAL_EDITS,
    ColumnDeleted,
    ColumnInserted,
    RestyleCompleted,
    RestyleFailed,
    RowDeleted,
    RowInserted,
    SnippetFailed,
    TableRealigned,
)

__all__ = [
    "EventBus",
    "STRUCTURAL_EDITS",
    "ColumnDeleted",
    "ColumnInserted",
    "RestyleCompleted",
    "RestyleFailed",
    "RowDeleted",
    "RowInserted",
    "SnippetFailed",
    "TableRealigned",
]
