"""tablestyle CLI entry point: Click group with subcommands."""

import logging

import click

from tablestyle import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tablestyle")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """tablestyle - rule-based conditional styling for table cells."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Import and register subcommands
from tablestyle.cli.check import check  # noqa: E402
from tablestyle.cli.restyle import restyle  # noqa: E402

cli.add_command(check)
cli.add_command(restyle)
