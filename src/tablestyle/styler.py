"""Table styling driver: restyles every cell of a table.

A restyle pass clears the markers carrying the styler's tag, parses the
table's declared attributes, resolves the style of every data cell and
publishes one marker per styled cell.  Markers with other tags are never
touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tablestyle.config import StylerConfig
from tablestyle.errors import RuleSyntaxError, SnippetEvaluationError
from tablestyle.events.bus import EventBus
from tablestyle.events.types import (
    STRUCTURAL_EDITS,
    RestyleCompleted,
    RestyleFailed,
    SnippetFailed,
)
from tablestyle.host.base import AttributeSink, GridAccessor
from tablestyle.model.diagnostic import Diagnostic, Severity
from tablestyle.model.rule import RuleSet, TableAttributes
from tablestyle.parser import parse_table_attributes
from tablestyle.resolver import resolve_style

__all__ = ["RestyleReport", "TableStyler", "restyle_table"]

logger = logging.getLogger(__name__)


@dataclass
class RestyleReport:
    """Summary of one restyle pass."""

    cells: int = 0
    markers: int = 0
    skipped: list[tuple[int, int]] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def snippet_failures(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.rule == "snippet_evaluation"]


class TableStyler:
    """Restyles a table through a grid accessor and an attribute sink."""

    def __init__(self, config: StylerConfig | None = None, event_bus: EventBus | None = None) -> None:
        self.config = config or StylerConfig()
        self.event_bus = event_bus
        self._running = False
        self._attached: tuple | None = None

    @property
    def tag(self) -> str:
        return self.config.tag

    # --- restyle --------------------------------------------------------------

    def parse(self, attributes: TableAttributes) -> RuleSet:
        return parse_table_attributes(attributes, stripe_color=self.config.stripe_color)

    def restyle(
        self,
        grid: GridAccessor,
        sink: AttributeSink,
        attributes: TableAttributes,
    ) -> RestyleReport:
        """Clear this styler's markers and republish them for every cell.

        Raises RuleSyntaxError (before publishing anything) when the declared
        attributes are malformed, and SnippetEvaluationError when
        ``strict_snippets`` is set and a snippet fails.
        """
        if self._running:
            raise RuntimeError("restyle already in progress for this styler")
        self._running = True
        try:
            return self._restyle(grid, sink, attributes)
        except (RuleSyntaxError, SnippetEvaluationError) as exc:
            logger.error("Restyle failed: %s", exc)
            self._emit(RestyleFailed(tag=self.tag, error=str(exc)))
            raise
        finally:
            self._running = False

    def _restyle(
        self,
        grid: GridAccessor,
        sink: AttributeSink,
        attributes: TableAttributes,
    ) -> RestyleReport:
        if self.config.keep_stale_on_error:
            rule_set = self.parse(attributes)
            sink.clear_markers(self.tag)
        else:
            sink.clear_markers(self.tag)
            rule_set = self.parse(attributes)

        report = RestyleReport()

        def on_error(error: SnippetEvaluationError) -> None:
            report.diagnostics.append(
                Diagnostic(
                    rule="snippet_evaluation",
                    severity=Severity.WARNING,
                    message=str(error),
                    category="computed",
                    cell=(error.row or 0, error.column or 0),
                )
            )
            self._emit(
                SnippetFailed(
                    index=error.index,
                    row=error.row or 0,
                    column=error.column or 0,
                    error=str(error),
                )
            )

        pending: list[tuple[int, int, tuple[tuple[str, str], ...]]] = []
        rows, columns = grid.row_count(), grid.column_count()
        for row in range(1, rows + 1):
            for column in range(1, columns + 1):
                report.cells += 1
                span = grid.cell_span(row, column)
                if span is None:
                    logger.debug("No span for cell (%d, %d), skipping", row, column)
                    report.skipped.append((row, column))
                    continue
                text = grid.cell_text(row, column)
                style = resolve_style(
                    row,
                    column,
                    text,
                    rule_set,
                    strict=self.config.strict_snippets,
                    on_error=on_error,
                )
                if style:
                    pending.append((span[0], span[1], style.as_pairs()))

        # Nothing is published unless every cell resolved.
        for start, end, pairs in pending:
            sink.publish_marker(start, end, self.tag, pairs)
        report.markers = len(pending)

        logger.info(
            "Restyled %dx%d table: %d marker(s), %d cell(s) skipped",
            rows,
            columns,
            report.markers,
            len(report.skipped),
        )
        self._emit(RestyleCompleted(tag=self.tag, markers=report.markers, skipped=len(report.skipped)))
        return report

    def _emit(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)

    # --- edit notifications ---------------------------------------------------

    def attach(
        self,
        bus: EventBus,
        grid: GridAccessor,
        sink: AttributeSink,
        attributes: TableAttributes,
    ) -> None:
        """Restyle the table after every structural edit published on *bus*."""
        self.detach()

        def on_edit(event: object) -> None:
            logger.debug("Restyling after %s", type(event).__name__)
            self.restyle(grid, sink, attributes)

        for event_type in STRUCTURAL_EDITS:
            bus.subscribe(event_type, on_edit)
        self._attached = (bus, on_edit)

    def detach(self) -> None:
        """Stop restyling on edits; a no-op when not attached."""
        if self._attached is None:
            return
        bus, on_edit = self._attached
        for event_type in STRUCTURAL_EDITS:
            bus.unsubscribe(event_type, on_edit)
        self._attached = None

    @property
    def attached(self) -> bool:
        return self._attached is not None


def restyle_table(
    grid: GridAccessor,
    sink: AttributeSink,
    attributes: TableAttributes,
    config: StylerConfig | None = None,
) -> RestyleReport:
    """Restyle *grid* once with a fresh TableStyler."""
    return TableStyler(config).restyle(grid, sink, attributes)
