"""CLI command: tablestyle restyle -- style a table and print its markers."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from tablestyle.cli.document import DocumentError, load_document
from tablestyle.config import StylerConfig
from tablestyle.errors import RuleSyntaxError, SnippetEvaluationError
from tablestyle.host.memory import MarkerStore
from tablestyle.styler import TableStyler


@click.command()
@click.argument("document", type=click.Path(exists=True))
@click.option("--strict", is_flag=True, help="Abort when a computed snippet fails")
@click.option("--keep-stale", is_flag=True, help="Keep old markers if the rules fail to parse")
@click.option("--tag", default="tablestyle", help="Marker tag owned by this styler")
@click.option("--stripe-color", default="gray90", help="Background of striped rows")
@click.option("--json", "as_json", is_flag=True, help="Print markers as JSON")
def restyle(
    document: str,
    strict: bool,
    keep_stale: bool,
    tag: str,
    stripe_color: str,
    as_json: bool,
) -> None:
    """Restyle the table of a JSON document and print the resulting markers."""
    path = Path(document)
    try:
        grid, attributes = load_document(path)
    except DocumentError as exc:
        click.echo(f"Document error: {exc}", err=True)
        sys.exit(1)

    config = StylerConfig(
        tag=tag,
        stripe_color=stripe_color,
        strict_snippets=strict,
        keep_stale_on_error=keep_stale,
    )
    sink = MarkerStore()
    try:
        report = TableStyler(config).restyle(grid, sink, attributes)
    except RuleSyntaxError as exc:
        click.echo(f"Syntax error in {exc}", err=True)
        sys.exit(1)
    except SnippetEvaluationError as exc:
        click.echo(f"Snippet failed: {exc}", err=True)
        sys.exit(1)

    text = grid.text
    if as_json:
        payload = [
            {
                "start": m.start,
                "end": m.end,
                "text": text[m.start:m.end].rstrip(),
                "attributes": m.style,
            }
            for m in sink.markers(tag)
        ]
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(text, nl=False)
        click.echo()
        for marker in sink.markers(tag):
            cell = text[marker.start:marker.end].rstrip()
            attrs = " ".join(f":{k} {v}" for k, v in marker.attributes)
            click.echo(f"  [{marker.start}:{marker.end}] {cell!r} {attrs}")

    for diag in report.diagnostics:
        click.echo(str(diag), err=True)
