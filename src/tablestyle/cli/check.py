"""CLI command: tablestyle check -- parse a table's styling rules."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tablestyle.cli.document import DocumentError, load_document
from tablestyle.errors import RuleSyntaxError
from tablestyle.model.diagnostic import Diagnostic, Severity
from tablestyle.parser import parse_table_attributes


@click.command()
@click.argument("document", type=click.Path(exists=True))
def check(document: str) -> None:
    """Parse the styling attributes of a JSON table document.

    Unknown attribute names are reported as warnings. Exits with code 0 when
    every rule parses, 1 on a syntax error.
    """
    path = Path(document)
    try:
        grid, attributes = load_document(path)
    except DocumentError as exc:
        click.echo(f"Document error: {exc}", err=True)
        sys.exit(1)

    diagnostics = [
        Diagnostic(
            rule="unknown_attribute",
            severity=Severity.WARNING,
            message=f"unknown attribute {name!r} is ignored",
        )
        for name in sorted(attributes.extra)
    ]
    rule_set = None
    try:
        rule_set = parse_table_attributes(attributes)
    except RuleSyntaxError as exc:
        diagnostics.append(
            Diagnostic(
                rule="rule_syntax",
                severity=Severity.ERROR,
                message=f"Syntax error in {exc}",
                category=exc.category,
            )
        )

    for diag in diagnostics:
        click.echo(str(diag), err=True)
    if rule_set is None or any(d.is_error for d in diagnostics):
        sys.exit(1)

    click.echo(f"OK: {path.name} ({grid.row_count()} row(s) x {grid.column_count()} column(s))")
    click.echo(f"  background: {len(rule_set.background)} rule(s)")
    click.echo(f"  foreground: {len(rule_set.foreground)} rule(s)")
    click.echo(f"  custom:     {len(rule_set.custom)} rule(s)")
    click.echo(f"  computed:   {len(rule_set.snippets)} snippet(s)")
